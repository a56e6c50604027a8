"""
Media directory scanning.

Media files are stored under the name taken from their CDN URL, which
starts with (or at least contains) the media identifier. The scanner
reads the identifiers back from the file names so the caller can tell
which media items of a version are already cached.
"""

from __future__ import annotations

import logging
import re
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import anyio

from ..errors import ScanError

logger = logging.getLogger(__name__)

_DIGIT_RUN_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class MediaFileInfo:
    media_id: int
    file_path: Path
    file_name: str
    size: int


def extract_media_id_from_filename(filename: str) -> Optional[int]:
    """
    Return the first maximal run of ASCII digits in `filename` as an int.

    "12345.jpeg", "12345-preview.jpeg" and "preview-12345.jpeg" all give
    12345; leading zeros are dropped ("007.png" -> 7). `None` when the name
    holds no digit.
    """
    match = _DIGIT_RUN_RE.search(filename)
    if match is None:
        return None
    return int(match.group(0), 10)


class MediaScanner:
    """Scanner for the media files of a version directory."""

    @staticmethod
    async def scan_media_directory(media_path: Union[str, Path]) -> List[MediaFileInfo]:
        """
        List the media files in `media_path`, sorted by media id.

        A missing directory yields an empty list. Entries that are not
        regular files, or whose names hold no digits, are skipped.

        Raises:
            ScanError: the directory cannot be checked or read.
        """
        directory = anyio.Path(media_path)
        media_files: List[MediaFileInfo] = []
        try:
            if not await directory.exists():
                return []

            async for entry in directory.iterdir():
                try:
                    st = await entry.stat()
                except OSError as e:
                    logger.debug("Skipping unreadable entry %s: %s", entry, e)
                    continue
                if not stat.S_ISREG(st.st_mode):
                    continue

                media_id = extract_media_id_from_filename(entry.name)
                if media_id is None:
                    logger.debug("Skipping %s: no numeric ID in file name", entry)
                    continue

                media_files.append(
                    MediaFileInfo(
                        media_id=media_id,
                        file_path=Path(entry),
                        file_name=entry.name,
                        size=st.st_size,
                    )
                )
        except OSError as e:
            raise ScanError(media_path, e) from e

        return MediaScanner.sort_by_media_id(media_files)

    @staticmethod
    def sort_by_media_id(files: Iterable[MediaFileInfo]) -> List[MediaFileInfo]:
        """Ascending by media id; equal ids are ordered by file name."""
        return sorted(files, key=lambda info: (info.media_id, info.file_name))
