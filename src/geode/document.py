from __future__ import annotations

from .constants import GEODE_TAB_STOP
from .models import EditorConfig, Row
from .syntax import update_syntax


def render_of(chars: str, tab_stop: int = GEODE_TAB_STOP) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def cx_to_rx(row: Row, cx: int, tab_stop: int = GEODE_TAB_STOP) -> int:
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


def rx_to_cx(row: Row, rx: int, tab_stop: int = GEODE_TAB_STOP) -> int:
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        if ch == "\t":
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return row.size


def update_row(config: EditorConfig, row: Row) -> None:
    row.render = render_of(row.chars)
    update_syntax(config, row.idx)


def insert_row(config: EditorConfig, at: int, s: str) -> None:
    if at < 0 or at > config.numrows:
        return
    config.rows.insert(at, Row(idx=at, chars=s))
    for j in range(at + 1, config.numrows):
        config.rows[j].idx = j
    update_row(config, config.rows[at])
    if at + 1 < config.numrows:
        update_syntax(config, at + 1)
    config.dirty += 1


def del_row(config: EditorConfig, at: int) -> None:
    if at < 0 or at >= config.numrows:
        return
    del config.rows[at]
    for j in range(at, config.numrows):
        config.rows[j].idx = j
    if at < config.numrows:
        update_syntax(config, at)
    config.dirty += 1


def row_insert_char(config: EditorConfig, row: Row, at: int, c: str) -> None:
    if at < 0 or at > row.size:
        at = row.size
    if config.overwrite and at < row.size:
        row.chars = row.chars[:at] + c + row.chars[at + 1 :]
    else:
        row.chars = row.chars[:at] + c + row.chars[at:]
    update_row(config, row)
    config.dirty += 1


def row_append_string(config: EditorConfig, row: Row, s: str) -> None:
    row.chars += s
    update_row(config, row)
    config.dirty += 1


def row_del_char(config: EditorConfig, row: Row, at: int) -> None:
    if at < 0 or at >= row.size:
        return
    row.chars = row.chars[:at] + row.chars[at + 1 :]
    update_row(config, row)
    config.dirty += 1


def split_row(config: EditorConfig, at_row: int, at: int) -> None:
    """Move ``chars[at:]`` of ``rows[at_row]`` into a new row below it."""
    row = config.rows[at_row]
    at = max(0, min(at, row.size))
    insert_row(config, at_row + 1, row.chars[at:])
    row.chars = row.chars[:at]
    update_row(config, row)


def join_with_previous(config: EditorConfig, at_row: int) -> int:
    """Append ``rows[at_row]`` to the row above and delete it.

    Returns the column where the joined text starts in the previous row.
    """
    prev = config.rows[at_row - 1]
    join_at = prev.size
    row_append_string(config, prev, config.rows[at_row].chars)
    del_row(config, at_row)
    return join_at


def rows_to_string(config: EditorConfig) -> str:
    return "".join(f"{row.chars}\n" for row in config.rows)
