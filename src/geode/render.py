from __future__ import annotations

import os
import time

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_ON,
    ANSI_RESET,
    ANSI_SHOW_CURSOR,
    GEODE_MESSAGE_SECONDS,
    GEODE_VERSION,
    HL_NORMAL,
)
from .document import rows_to_string
from .models import EditorConfig, Row
from .syntax import syntax_to_color
from .viewport import scroll


def human_size(n: int) -> str:
    if n < 1024:
        return f"{n}B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f}KB"
    return f"{n / (1024 * 1024):.1f}MB"


def refresh_screen(config: EditorConfig, fd: int) -> None:
    scroll(config)
    frame = build_frame(config)
    os.write(fd, frame.encode("latin-1", errors="replace"))


def build_frame(config: EditorConfig, now: float | None = None) -> str:
    now = time.time() if now is None else now
    ab: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(config, ab)
    draw_status_bar(config, ab, now)
    draw_message_bar(config, ab, now)
    ab.append(f"\x1b[{config.cy - config.rowoff + 1};{config.rx - config.coloff + 1}H")
    ab.append(ANSI_SHOW_CURSOR if config.cursor_visible else ANSI_HIDE_CURSOR)
    return "".join(ab)


def draw_rows(config: EditorConfig, ab: list[str]) -> None:
    for y in range(config.screenrows):
        filerow = config.rowoff + y
        if filerow < config.numrows:
            draw_row(config.rows[filerow], config.coloff, config.screencols, ab)
        elif config.numrows == 0 and y == config.screenrows // 3:
            draw_welcome(config, ab)
        else:
            ab.append("~")
        ab.append(ANSI_CLEAR_LINE)
        ab.append("\r\n")


def draw_welcome(config: EditorConfig, ab: list[str]) -> None:
    welcome = f"Geode editor -- version {GEODE_VERSION}"[: config.screencols]
    padding = (config.screencols - len(welcome)) // 2
    if padding:
        ab.append("~")
        padding -= 1
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def draw_row(row: Row, coloff: int, width: int, ab: list[str]) -> None:
    chars = row.render[coloff : coloff + width]
    hl = row.hl[coloff : coloff + width]
    current_color = -1
    for ch, h in zip(chars, hl):
        code = ord(ch)
        if code < 32 or code == 127:
            sym = chr(ord("@") + code) if code <= 26 else "?"
            ab.append(ANSI_INVERT_ON)
            ab.append(sym)
            ab.append(ANSI_RESET)
            if current_color != -1:
                ab.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                ab.append("\x1b[39m")
                current_color = -1
            ab.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                ab.append(f"\x1b[{color}m")
                current_color = color
            ab.append(ch)
    ab.append("\x1b[39m")


def status_fields(config: EditorConfig, now: float) -> tuple[str, str]:
    filename = config.filename or "[No Name]"
    modified = " (modified)" if config.dirty else ""
    status = f"{filename:.20} - {config.numrows} lines{modified}"
    lang = config.syntax.name if config.syntax else "no ft"
    size = human_size(len(rows_to_string(config).encode("latin-1", errors="replace")))
    mode = "OVR" if config.overwrite else "INS"
    clock = time.strftime("%H:%M", time.localtime(now))
    rstatus = f"{lang} | {size} | {config.cy + 1}:{config.cx + 1} | {mode} | {clock}"
    return status, rstatus


def draw_status_bar(config: EditorConfig, ab: list[str], now: float) -> None:
    status, rstatus = status_fields(config, now)
    status = status[: config.screencols]
    ab.append(ANSI_INVERT_ON)
    ab.append(status)
    fill = len(status)
    while fill < config.screencols:
        if config.screencols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append(ANSI_RESET)
    ab.append("\r\n")


def draw_message_bar(config: EditorConfig, ab: list[str], now: float) -> None:
    ab.append(ANSI_CLEAR_LINE)
    if config.statusmsg and now - config.statusmsg_time < GEODE_MESSAGE_SECONDS:
        ab.append(config.statusmsg[: config.screencols])
