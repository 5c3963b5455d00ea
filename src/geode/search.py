from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESC,
    HL_MATCH,
)
from .document import rx_to_cx
from .models import EditorConfig

if TYPE_CHECKING:
    from .editor import Editor


class IncrementalSearch:
    """Prompt callback that moves to the next match after every keystroke.

    Holds the last matching row, the scan direction and the highlight of the
    row currently overlaid with ``HL_MATCH``.
    """

    def __init__(self, config: EditorConfig) -> None:
        self.config = config
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[int] | None = None

    def restore_highlight(self) -> None:
        if self.saved_hl is not None and 0 <= self.saved_hl_line < self.config.numrows:
            self.config.rows[self.saved_hl_line].hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1

    def __call__(self, query: str, key: int) -> None:
        self.restore_highlight()

        if key in (ENTER, ESC):
            self.last_match = -1
            self.direction = 1
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        if self.last_match == -1:
            self.direction = 1
        if query:
            self.search(query)

    def search(self, query: str) -> bool:
        cfg = self.config
        current = self.last_match
        for _ in range(cfg.numrows):
            current += self.direction
            if current == -1:
                current = cfg.numrows - 1
            elif current == cfg.numrows:
                current = 0

            row = cfg.rows[current]
            match = row.render.find(query)
            if match == -1:
                continue

            self.last_match = current
            cfg.cy = current
            cfg.cx = rx_to_cx(row, match)
            cfg.rowoff = current

            self.saved_hl_line = current
            self.saved_hl = row.hl.copy()
            for i in range(match, min(match + len(query), row.rsize)):
                row.hl[i] = HL_MATCH
            return True
        return False


def find(editor: Editor) -> None:
    cfg = editor.cfg
    saved = cfg.snapshot()
    query = editor.prompt("Search: %s (Use ESC/Arrows/Enter)", IncrementalSearch(cfg))
    if query is None:
        cfg.restore(saved)
