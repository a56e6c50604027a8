"""
Identifier recovery from catalog URLs.

Media items fetched through the model endpoints sometimes arrive with
`id: null`. Their CDN URLs always end in `<id>.<ext>` (or a bare `<id>`),
e.g.

    https://image.civitai.com/xG1nkqKTMzGDvpLrqFT7WA/<uuid>/width=1024/1743606.jpeg

so the identifier can be read back from the final path segment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from urllib.parse import unquote, urlsplit

from ..errors import (
    ExtractionError,
    MalformedUrlError,
    NonNumericSegmentError,
    UrlFilenameExtractionError,
)
from .entities import ModelImage

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")


def extract_filename_from_url(url: str) -> str:
    """Return the last non-empty path segment of `url`."""
    try:
        path = urlsplit(url).path
    except ValueError as e:
        raise UrlFilenameExtractionError(f"Failed to parse URL {url!r}: {e}", url) from e

    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        raise UrlFilenameExtractionError(f"Failed to extract filename from URL: {url}", url)
    return unquote(segments[-1])


def remove_file_extension(filename: str) -> str:
    """Strip one trailing dotted extension; dot-files are left untouched."""
    dot = filename.rfind(".")
    if dot <= 0:
        return filename
    return filename[:dot]


def extract_id_from_url(url: str) -> int:
    """
    Parse the numeric identifier embedded in the final path segment.

    Raises:
        MalformedUrlError: the URL has no path segment.
        NonNumericSegmentError: the segment (minus extension) is not an integer.
    """
    try:
        filename = extract_filename_from_url(url)
    except UrlFilenameExtractionError as e:
        raise MalformedUrlError(f"No path segment in URL: {url}", url) from e

    segment = remove_file_extension(filename)
    if not _DIGITS_RE.fullmatch(segment):
        raise NonNumericSegmentError(
            f"Invalid ID extracted from URL {url}: {segment!r}", url, segment
        )
    return int(segment, 10)


@dataclass
class MediaRecoveryFailure:
    position: int
    url: str
    error: ExtractionError


@dataclass
class MediaRecovery:
    """Outcome of `recover_media_ids`: usable media plus per-item failures."""

    media: List[ModelImage] = field(default_factory=list)
    failures: List[MediaRecoveryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def recover_media_ids(
    images: Iterable[ModelImage], owner_id: Optional[int] = None
) -> MediaRecovery:
    """
    Fill in missing media identifiers from their URLs.

    Items that already have an id pass through unchanged. Items whose id
    cannot be recovered are left out of `media` and reported in
    `failures`; the rest of the batch is still returned.
    """
    result = MediaRecovery()
    for position, image in enumerate(images):
        if image.id is not None:
            result.media.append(image)
            continue

        try:
            media_id = extract_id_from_url(image.url)
        except ExtractionError as e:
            logger.warning(
                "Skipping media #%d of version %s: %s", position, owner_id, e
            )
            result.failures.append(MediaRecoveryFailure(position=position, url=image.url, error=e))
            continue

        result.media.append(image.model_copy(update={"id": media_id}))

    return result
