"""
Configuration for the cache service.

Values are read from the environment once, at import time. The layout
core never reads them itself: the service layer passes `CACHE_ROOT` into
the path builder explicitly.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Root directory of the local model cache.
# Models live at `<CACHE_ROOT>/<modelType>/<modelId>/...`.
CACHE_ROOT: Path = Path(os.environ.get("CIVITAI_CACHE_ROOT", "models")).resolve()

LOG_LEVEL: str = os.environ.get("CIVITAI_CACHE_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a root handler for the service entrypoint."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
