from __future__ import annotations

import errno
import os

import pytest

from geode.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    INSERT_KEY,
    PAGE_DOWN,
    PAGE_UP,
)
from geode.terminal import RawMode, get_cursor_position, get_window_size, poll_key, read_key


@pytest.mark.parametrize(
    ("data", "key"),
    [
        (b"a", ord("a")),
        (b"\r", ENTER),
        (b"\x7f", BACKSPACE),
        (b"\x1b[A", ARROW_UP),
        (b"\x1b[B", ARROW_DOWN),
        (b"\x1b[C", ARROW_RIGHT),
        (b"\x1b[D", ARROW_LEFT),
        (b"\x1b[H", HOME_KEY),
        (b"\x1b[F", END_KEY),
        (b"\x1bOH", HOME_KEY),
        (b"\x1bOF", END_KEY),
        (b"\x1b[1~", HOME_KEY),
        (b"\x1b[7~", HOME_KEY),
        (b"\x1b[4~", END_KEY),
        (b"\x1b[8~", END_KEY),
        (b"\x1b[2~", INSERT_KEY),
        (b"\x1b[3~", DEL_KEY),
        (b"\x1b[5~", PAGE_UP),
        (b"\x1b[6~", PAGE_DOWN),
    ],
)
def test_read_key_decodes_sequences(key_pipe, data, key):
    assert read_key(key_pipe(data)) == key


@pytest.mark.parametrize(
    "data",
    [b"\x1b", b"\x1b[", b"\x1b[9~", b"\x1b[Z", b"\x1b[5x", b"\x1b[5", b"\x1bOA", b"\x1bxy"],
)
def test_unknown_or_truncated_sequences_degrade_to_escape(key_pipe, data):
    assert read_key(key_pipe(data)) == ESC


def test_keys_are_read_one_at_a_time(key_pipe):
    fd = key_pipe(b"x\x1b[Ay")
    assert [read_key(fd), read_key(fd), read_key(fd)] == [ord("x"), ARROW_UP, ord("y")]


def test_poll_key_returns_none_without_input(key_pipe):
    fd = key_pipe(b"")
    assert poll_key(fd) is None


def test_poll_key_decodes_like_read_key(key_pipe):
    fd = key_pipe(b"\x1b[6~q")
    assert poll_key(fd) == PAGE_DOWN
    assert poll_key(fd) == ord("q")
    assert poll_key(fd) is None


def test_window_size_falls_back_to_cursor_report(key_pipe, devnull_fd):
    # First report is the saved position, second the bottom-right corner.
    ifd = key_pipe(b"\x1b[3;7R\x1b[50;132R")
    assert get_window_size(ifd, devnull_fd) == (50, 132)


def test_cursor_report_must_parse(key_pipe, devnull_fd):
    with pytest.raises(OSError) as excinfo:
        get_cursor_position(key_pipe(b"garbage"), devnull_fd)
    assert excinfo.value.errno == errno.EIO


def test_raw_mode_requires_a_tty(key_pipe):
    with pytest.raises(OSError) as excinfo:
        with RawMode(key_pipe(b"")):
            pass
    assert excinfo.value.errno == errno.ENOTTY


def test_raw_mode_restores_attributes_on_a_pty():
    pty = pytest.importorskip("pty")
    termios = pytest.importorskip("termios")
    master, slave = pty.openpty()
    try:
        before = termios.tcgetattr(slave)
        with RawMode(slave):
            raw = termios.tcgetattr(slave)
            assert not raw[3] & termios.ECHO
            assert not raw[3] & termios.ICANON
            assert raw[6][termios.VMIN] == 0
            assert raw[6][termios.VTIME] == 1
        assert termios.tcgetattr(slave) == before
    finally:
        os.close(master)
        os.close(slave)
