from __future__ import annotations

import errno
import logging
import os
import signal
import sys
import time
from typing import Callable, Final

from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_C,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    GEODE_BLINK_TICKS,
    GEODE_QUERY_LEN,
    GEODE_QUIT_TIMES,
    HOME_KEY,
    INSERT_KEY,
    LOG_ENV_VAR,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
)
from .document import (
    insert_row,
    join_with_previous,
    row_del_char,
    row_insert_char,
    rows_to_string,
    split_row,
)
from .models import EditorConfig
from .render import refresh_screen
from .search import find
from .syntax import select_syntax_highlight
from .terminal import RawMode, get_window_size, poll_key, read_key

logger = logging.getLogger(__name__)

STDIN_FD: Final[int] = 0
STDOUT_FD: Final[int] = 1

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find | Ins = insert/overwrite"

PromptCallback = Callable[[str, int], None]


def is_printable(c: int) -> bool:
    return 32 <= c <= 126 or 128 <= c <= 255


class Editor:
    def __init__(
        self,
        stdin_fd: int = STDIN_FD,
        stdout_fd: int = STDOUT_FD,
        size: tuple[int, int] | None = None,
    ) -> None:
        self.cfg = EditorConfig()
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.blink_ticks = 0
        if size is None:
            self.update_window_size()
        else:
            self.set_window_size(*size)
        self.key_handlers: dict[int, Callable[[], None]] = {
            CTRL_S: self.save,
            CTRL_F: self.find,
            CTRL_C: self._noop,
            CTRL_L: self._noop,
            ESC: self._noop,
            ENTER: self.insert_newline,
            TAB: self._insert_tab,
            BACKSPACE: self.del_char,
            CTRL_H: self.del_char,
            DEL_KEY: self.delete_forward,
            INSERT_KEY: self.toggle_overwrite,
            HOME_KEY: self._home,
            END_KEY: self._end,
            PAGE_UP: self._page_up,
            PAGE_DOWN: self._page_down,
            ARROW_UP: self._move_up,
            ARROW_DOWN: self._move_down,
            ARROW_LEFT: self._move_left,
            ARROW_RIGHT: self._move_right,
        }

    def set_window_size(self, rows: int, cols: int) -> None:
        # Two lines are reserved for the status and message bars.
        self.cfg.screenrows = max(1, rows - 2)
        self.cfg.screencols = max(1, cols)

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.set_window_size(rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, msg: str) -> None:
        self.cfg.statusmsg = msg
        self.cfg.statusmsg_time = time.time()

    def select_syntax_highlight(self, filename: str | None) -> None:
        select_syntax_highlight(self.cfg, filename)

    def open_file(self, filename: str) -> None:
        cfg = self.cfg
        cfg.filename = filename
        self.select_syntax_highlight(filename)
        try:
            with open(filename, "rb") as f:
                for line in f:
                    insert_row(cfg, cfg.numrows, line.rstrip(b"\r\n").decode("latin-1"))
        except FileNotFoundError:
            logger.info("%s does not exist yet, starting empty", filename)
        cfg.dirty = 0
        logger.info("opened %s: %d rows", filename, cfg.numrows)

    def save(self) -> None:
        cfg = self.cfg
        if not cfg.filename:
            filename = self.prompt("Save as: %s (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return
            cfg.filename = filename
            self.select_syntax_highlight(filename)

        data = rows_to_string(cfg).encode("latin-1", errors="replace")
        try:
            fd = os.open(cfg.filename, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                while written < len(data):
                    n = os.write(fd, data[written:])
                    if n <= 0:
                        raise OSError(errno.EIO, "short write")
                    written += n
            finally:
                os.close(fd)
        except OSError as exc:
            logger.warning("saving %s failed: %s", cfg.filename, exc)
            reason = os.strerror(exc.errno) if exc.errno else str(exc)
            self.set_status_message(f"Can't save! I/O error: {reason}")
            return

        cfg.dirty = 0
        logger.info("wrote %d bytes to %s", len(data), cfg.filename)
        self.set_status_message(f"{len(data)} bytes written to disk")

    def refresh_screen(self) -> None:
        refresh_screen(self.cfg, self.stdout_fd)

    def prompt(self, template: str, callback: PromptCallback | None = None) -> str | None:
        """Read a line in the message bar; None when cancelled with Escape."""
        buf = ""
        while True:
            self.set_status_message(template % buf)
            self.refresh_screen()

            c = read_key(self.stdin_fd)
            if c in (DEL_KEY, CTRL_H, BACKSPACE):
                buf = buf[:-1]
            elif c == ESC:
                self.set_status_message("")
                if callback is not None:
                    callback(buf, c)
                return None
            elif c == ENTER:
                if buf:
                    self.set_status_message("")
                    if callback is not None:
                        callback(buf, c)
                    return buf
            elif is_printable(c) and len(buf) < GEODE_QUERY_LEN:
                buf += chr(c)

            if callback is not None:
                callback(buf, c)

    def find(self) -> None:
        find(self)

    def insert_char(self, c: str) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            insert_row(cfg, cfg.numrows, "")
        row_insert_char(cfg, cfg.rows[cfg.cy], cfg.cx, c)
        cfg.cx += 1

    def insert_newline(self) -> None:
        cfg = self.cfg
        if cfg.cx == 0 or cfg.cy == cfg.numrows:
            insert_row(cfg, cfg.cy, "")
        else:
            split_row(cfg, cfg.cy, cfg.cx)
        cfg.cy += 1
        cfg.cx = 0

    def del_char(self) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            return
        if cfg.cx == 0 and cfg.cy == 0:
            return

        if cfg.cx > 0:
            row_del_char(cfg, cfg.rows[cfg.cy], cfg.cx - 1)
            cfg.cx -= 1
        else:
            cfg.cx = join_with_previous(cfg, cfg.cy)
            cfg.cy -= 1

    def delete_forward(self) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            return
        if cfg.cx == cfg.rows[cfg.cy].size and cfg.cy + 1 == cfg.numrows:
            return
        self._move_right()
        self.del_char()

    def toggle_overwrite(self) -> None:
        self.cfg.overwrite = not self.cfg.overwrite

    def _insert_tab(self) -> None:
        self.insert_char("\t")

    def _noop(self) -> None:
        pass

    def _row_len(self) -> int:
        cfg = self.cfg
        return cfg.rows[cfg.cy].size if cfg.cy < cfg.numrows else 0

    def _clamp_cx(self) -> None:
        self.cfg.cx = min(self.cfg.cx, self._row_len())

    def _move_left(self) -> None:
        cfg = self.cfg
        if cfg.cx > 0:
            cfg.cx -= 1
        elif cfg.cy > 0:
            cfg.cy -= 1
            cfg.cx = cfg.rows[cfg.cy].size
        self._clamp_cx()

    def _move_right(self) -> None:
        cfg = self.cfg
        if cfg.cy < cfg.numrows:
            if cfg.cx < cfg.rows[cfg.cy].size:
                cfg.cx += 1
            else:
                cfg.cy += 1
                cfg.cx = 0
        self._clamp_cx()

    def _move_up(self) -> None:
        if self.cfg.cy > 0:
            self.cfg.cy -= 1
        self._clamp_cx()

    def _move_down(self) -> None:
        if self.cfg.cy < self.cfg.numrows:
            self.cfg.cy += 1
        self._clamp_cx()

    def _home(self) -> None:
        self.cfg.cx = 0

    def _end(self) -> None:
        self.cfg.cx = self._row_len()

    def _page_up(self) -> None:
        cfg = self.cfg
        cfg.cy = cfg.rowoff
        for _ in range(cfg.screenrows):
            self._move_up()

    def _page_down(self) -> None:
        cfg = self.cfg
        cfg.cy = min(cfg.rowoff + cfg.screenrows - 1, cfg.numrows)
        for _ in range(cfg.screenrows):
            self._move_down()

    def confirm_quit(self) -> bool:
        cfg = self.cfg
        if cfg.dirty and cfg.quit_times > 0:
            self.set_status_message(
                f"WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {cfg.quit_times} more time(s) to quit."
            )
            cfg.quit_times -= 1
            return False
        return True

    def process_keypress(self, c: int) -> bool:
        """Apply one key. Returns True when the editor should exit."""
        self.cfg.cursor_visible = True
        self.blink_ticks = 0
        if c == CTRL_Q:
            return self.confirm_quit()

        handler = self.key_handlers.get(c)
        if handler is not None:
            handler()
        elif is_printable(c):
            self.insert_char(chr(c))

        self.cfg.quit_times = GEODE_QUIT_TIMES
        return False

    def tick(self) -> None:
        """Called when a key read times out; drives the cursor blink."""
        self.blink_ticks += 1
        if self.blink_ticks >= GEODE_BLINK_TICKS:
            self.blink_ticks = 0
            self.cfg.cursor_visible = not self.cfg.cursor_visible

    def loop(self) -> None:
        while True:
            self.refresh_screen()
            c = poll_key(self.stdin_fd)
            if c is None:
                self.tick()
                continue
            if self.process_keypress(c):
                return

    def clear_screen(self) -> None:
        os.write(self.stdout_fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())


def configure_logging() -> None:
    path = os.environ.get(LOG_ENV_VAR)
    if not path:
        return
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("geode")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def run(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: geode [filename]", file=sys.stderr)
        return 1
    configure_logging()
    if not os.isatty(STDIN_FD) or not os.isatty(STDOUT_FD):
        print("geode: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    try:
        with RawMode(STDIN_FD):
            editor = Editor()
            try:
                if args:
                    editor.open_file(args[0])
                signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
                editor.set_status_message(HELP_MESSAGE)
                editor.loop()
            finally:
                editor.clear_screen()
    except OSError as exc:
        logger.exception("fatal terminal error")
        print(f"geode: {exc}", file=sys.stderr)
        return 1
    return 0
