from __future__ import annotations

import logging
from collections import deque

from .constants import (
    DEFAULT_COLOR,
    HL_COLORS,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_NORMAL,
    HL_NUMBER,
    HL_OPERATOR,
    HL_STRING,
    SEPARATORS,
)
from .languages import HLDB
from .models import EditorConfig, Language

logger = logging.getLogger(__name__)


def is_separator(c: str) -> bool:
    return not c or c.isspace() or c == "\0" or c in SEPARATORS


def syntax_to_color(hl: int) -> int:
    return HL_COLORS.get(hl, DEFAULT_COLOR)


def find_syntax(filename: str) -> Language | None:
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if filename.endswith(pattern):
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(config: EditorConfig, filename: str | None) -> None:
    config.syntax = find_syntax(filename) if filename else None
    logger.debug(
        "filetype for %r: %s", filename, config.syntax.name if config.syntax else None
    )
    for row in config.rows:
        row.hl = [HL_NORMAL] * row.rsize
        row.open_comment = False
    if config.rows:
        update_syntax(config, 0, cascade_all=True)


def _match_keyword(keywords: tuple[str, ...], p: str, i: int) -> tuple[int, int]:
    """Return ``(length, class)`` of the longest keyword at ``p[i]``."""
    best_len = 0
    best_hl = HL_NORMAL
    for kw in keywords:
        kw2 = kw.endswith("|")
        token = kw[:-1] if kw2 else kw
        klen = len(token)
        if klen <= best_len or not p.startswith(token, i):
            continue
        tail = p[i + klen] if i + klen < len(p) else ""
        if is_separator(tail):
            best_len = klen
            best_hl = HL_KEYWORD2 if kw2 else HL_KEYWORD1
    return best_len, best_hl


def _match_operator(operators: tuple[str, ...], p: str, i: int) -> int:
    best = 0
    for op in operators:
        if len(op) > best and p.startswith(op, i):
            best = len(op)
    return best


def highlight_row(config: EditorConfig, idx: int) -> bool:
    """Recompute ``rows[idx].hl`` from scratch.

    Returns True when the row's open-comment state at end of line changed,
    meaning the following row must be recomputed too.
    """
    row = config.rows[idx]
    row.hl = [HL_NORMAL] * row.rsize
    syntax = config.syntax
    if syntax is None:
        changed = row.open_comment
        row.open_comment = False
        return changed

    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end

    p = row.render
    hl = row.hl
    prev_sep = True
    in_string = ""
    in_comment = idx > 0 and config.rows[idx - 1].open_comment

    i = 0
    while i < len(p):
        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and not in_comment and p.startswith(scs, i):
            for h in range(i, len(hl)):
                hl[h] = HL_COMMENT
            break

        if mcs and mce and not in_string:
            if in_comment:
                if p.startswith(mce, i):
                    for h in range(i, min(i + len(mce), len(hl))):
                        hl[h] = HL_COMMENT
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue
                hl[i] = HL_COMMENT
                i += 1
                continue
            if p.startswith(mcs, i):
                for h in range(i, min(i + len(mcs), len(hl))):
                    hl[h] = HL_COMMENT
                i += len(mcs)
                in_comment = True
                continue

        if syntax.flags & HL_HIGHLIGHT_STRINGS:
            if in_string:
                hl[i] = HL_STRING
                if ch == "\\" and i + 1 < len(p):
                    hl[i + 1] = HL_STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in ("'", '"'):
                in_string = ch
                hl[i] = HL_STRING
                i += 1
                continue

        if syntax.flags & HL_HIGHLIGHT_NUMBERS:
            if (ch.isdigit() and (prev_sep or prev_hl == HL_NUMBER)) or (
                ch == "." and prev_hl == HL_NUMBER
            ):
                hl[i] = HL_NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            klen, kind = _match_keyword(syntax.keywords, p, i)
            if klen:
                for h in range(i, i + klen):
                    hl[h] = kind
                i += klen
                prev_sep = False
                continue

        olen = _match_operator(syntax.operators, p, i)
        if olen:
            for h in range(i, i + olen):
                hl[h] = HL_OPERATOR
            i += olen
            prev_sep = True
            continue

        prev_sep = is_separator(ch)
        i += 1

    changed = row.open_comment != in_comment
    row.open_comment = in_comment
    return changed


def update_syntax(config: EditorConfig, idx: int, cascade_all: bool = False) -> None:
    """Highlight ``rows[idx]`` and every following row whose input changed."""
    pending = deque([idx])
    while pending:
        current = pending.popleft()
        changed = highlight_row(config, current)
        if (changed or cascade_all) and current + 1 < config.numrows:
            pending.append(current + 1)
