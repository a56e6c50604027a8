"""
Read-only filesystem probes used by the layout facades.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import anyio
from anyio import to_thread

logger = logging.getLogger(__name__)

SAFETENSORS_SUFFIX = ".safetensors"


async def path_exists(path: Union[str, Path]) -> bool:
    """`True` if `path` exists; any error while checking counts as absent."""
    try:
        return await anyio.Path(path).exists()
    except OSError as e:
        logger.debug("Existence check failed for %s: %s", path, e)
        return False


async def has_safetensors_file(dir_path: Union[str, Path]) -> bool:
    """Whether `dir_path` directly holds at least one `.safetensors` file."""
    try:
        async for entry in anyio.Path(dir_path).iterdir():
            if entry.name.endswith(SAFETENSORS_SUFFIX) and await entry.is_file():
                return True
    except OSError as e:
        logger.warning("Error scanning directory %s: %s", dir_path, e)
    return False


async def check_if_model_version_on_disk(version_path: Union[str, Path]) -> bool:
    return await path_exists(version_path) and await has_safetensors_file(version_path)


async def scan_model_files(base_path: Union[str, Path]) -> List[Path]:
    """All `.safetensors` files below `base_path`, sorted."""
    root = Path(base_path)
    return await to_thread.run_sync(
        lambda: sorted(root.rglob(f"*{SAFETENSORS_SUFFIX}"))
    )
