from __future__ import annotations

import os
from collections.abc import Iterable

import pytest

from geode.document import insert_row
from geode.editor import Editor
from geode.models import EditorConfig
from geode.syntax import select_syntax_highlight


def load_rows(config: EditorConfig, lines: Iterable[str], filename: str | None = None) -> EditorConfig:
    config.filename = filename
    select_syntax_highlight(config, filename)
    for line in lines:
        insert_row(config, config.numrows, line)
    config.dirty = 0
    return config


def make_config(lines: Iterable[str] = (), filename: str | None = None) -> EditorConfig:
    config = EditorConfig(screenrows=22, screencols=80)
    return load_rows(config, lines, filename)


@pytest.fixture
def devnull_fd():
    fd = os.open(os.devnull, os.O_WRONLY)
    yield fd
    os.close(fd)


@pytest.fixture
def key_pipe():
    """Return a function turning bytes into a readable fd that hits EOF after them."""
    opened: list[int] = []

    def _make(data: bytes = b"") -> int:
        r, w = os.pipe()
        if data:
            os.write(w, data)
        os.close(w)
        opened.append(r)
        return r

    yield _make
    for fd in opened:
        os.close(fd)


@pytest.fixture
def make_editor(devnull_fd, key_pipe):
    def _make(
        lines: Iterable[str] = (),
        filename: str | None = None,
        keys: bytes = b"",
        size: tuple[int, int] = (24, 80),
    ) -> Editor:
        editor = Editor(stdin_fd=key_pipe(keys), stdout_fd=devnull_fd, size=size)
        load_rows(editor.cfg, lines, filename)
        return editor

    return _make
