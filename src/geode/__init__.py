from __future__ import annotations

import logging

from .constants import GEODE_VERSION as __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__"]
