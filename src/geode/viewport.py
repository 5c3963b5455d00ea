from __future__ import annotations

from .document import cx_to_rx
from .models import EditorConfig


def scroll(config: EditorConfig) -> None:
    """Recompute ``rx`` and pull the offsets so the cursor is on screen."""
    config.rx = 0
    if config.cy < config.numrows:
        config.rx = cx_to_rx(config.rows[config.cy], config.cx)

    if config.cy < config.rowoff:
        config.rowoff = config.cy
    if config.cy >= config.rowoff + config.screenrows:
        config.rowoff = config.cy - config.screenrows + 1
    if config.rx < config.coloff:
        config.coloff = config.rx
    if config.rx >= config.coloff + config.screencols:
        config.coloff = config.rx - config.screencols + 1
