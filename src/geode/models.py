from __future__ import annotations

from dataclasses import dataclass, field

from .constants import GEODE_QUIT_TIMES


@dataclass(frozen=True, slots=True)
class Language:
    """Static highlighting rules for one filetype.

    Keywords ending in ``|`` are type keywords (``HL_KEYWORD2``), the rest
    are control keywords (``HL_KEYWORD1``).
    """

    name: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    operators: tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    idx: int
    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)
    open_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class SearchSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int


@dataclass(slots=True)
class EditorConfig:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    overwrite: bool = False
    syntax: Language | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    quit_times: int = GEODE_QUIT_TIMES
    cursor_visible: bool = True

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(self.cx, self.cy, self.coloff, self.rowoff)

    def restore(self, saved: SearchSnapshot) -> None:
        self.cx = saved.cx
        self.cy = saved.cy
        self.coloff = saved.coloff
        self.rowoff = saved.rowoff
