from __future__ import annotations

import atexit
import errno
import fcntl
import logging
import os
import re
import struct
import termios
from contextlib import AbstractContextManager

from .constants import (
    ANSI_CURSOR_FAR_CORNER,
    ANSI_CURSOR_QUERY,
    CSI_SIMPLE_MAP,
    CSI_TILDE_MAP,
    ESC,
    SS3_SIMPLE_MAP,
)

logger = logging.getLogger(__name__)

CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


def _read_byte_once(fd: int) -> int | None:
    """Read one byte, or None when the read timed out with no data."""
    try:
        data = os.read(fd, 1)
    except (InterruptedError, BlockingIOError):
        return None
    if not data:
        return None
    return data[0]


def _read_byte_blocking(fd: int) -> int:
    while True:
        c = _read_byte_once(fd)
        if c is not None:
            return c


def _decode_escape(fd: int) -> int:
    seq0 = _read_byte_once(fd)
    if seq0 is None:
        return ESC
    seq1 = _read_byte_once(fd)
    if seq1 is None:
        return ESC

    if seq0 == ord("["):
        if ord("0") <= seq1 <= ord("9"):
            seq2 = _read_byte_once(fd)
            if seq2 == ord("~"):
                return CSI_TILDE_MAP.get(seq1, ESC)
            return ESC
        return CSI_SIMPLE_MAP.get(seq1, ESC)
    if seq0 == ord("O"):
        return SS3_SIMPLE_MAP.get(seq1, ESC)
    return ESC


def read_key(fd: int) -> int:
    c = _read_byte_blocking(fd)
    if c != ESC:
        return c
    return _decode_escape(fd)


def poll_key(fd: int) -> int | None:
    """Like read_key, but return None when the read timeout expires first."""
    c = _read_byte_once(fd)
    if c is None or c != ESC:
        return c
    return _decode_escape(fd)


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    if os.write(ofd, ANSI_CURSOR_QUERY) != len(ANSI_CURSOR_QUERY):
        raise OSError(errno.EIO, "cursor query write failed")

    buf = bytearray()
    while len(buf) < 31:
        c = _read_byte_once(ifd)
        if c is None:
            break
        buf.append(c)
        if c == ord("R"):
            break

    match = CURSOR_REPORT_RE.match(bytes(buf))
    if not match:
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        pass

    logger.debug("TIOCGWINSZ unavailable, asking the terminal for its size")
    orig_row, orig_col = get_cursor_position(ifd, ofd)
    if os.write(ofd, ANSI_CURSOR_FAR_CORNER) != len(ANSI_CURSOR_FAR_CORNER):
        raise OSError(errno.EIO, "window query write failed")
    rows, cols = get_cursor_position(ifd, ofd)
    os.write(ofd, f"\x1b[{orig_row};{orig_col}H".encode())
    return rows, cols


class RawMode(AbstractContextManager["RawMode"]):
    """Character-at-a-time input, no echo, no signals, 100ms read timeout.

    The original attributes are restored on exit from the ``with`` block and,
    as a fallback, by an ``atexit`` hook.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")

        self._orig = termios.tcgetattr(self.fd)
        atexit.register(self.restore)
        raw = termios.tcgetattr(self.fd)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        logger.debug("entered raw mode on fd %d", self.fd)
        return self

    def restore(self) -> None:
        if self._orig is None:
            return
        orig, self._orig = self._orig, None
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, orig)
        atexit.unregister(self.restore)
        logger.debug("restored terminal attributes on fd %d", self.fd)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
