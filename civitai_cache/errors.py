"""
Exception types raised by the cache layout core.

Every error derives from `CacheLayoutError` so callers at the service
boundary can catch the whole family in one place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class CacheLayoutError(Exception):
    """Base class for all errors raised by civitai_cache."""


class ExtractionError(CacheLayoutError):
    """An identifier or filename could not be derived from a URL."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class MalformedUrlError(ExtractionError):
    """The URL has no path segment that could hold an identifier."""


class NonNumericSegmentError(ExtractionError):
    """The trailing path segment is not a base-10 integer."""

    def __init__(self, message: str, url: str, segment: str) -> None:
        super().__init__(message, url)
        self.segment = segment


class UrlFilenameExtractionError(ExtractionError):
    """The URL carries no filename usable for a media path."""


class NotFoundError(CacheLayoutError):
    """A file, media item or version is missing from its owning entity."""

    def __init__(self, kind: str, searched_id: int, owner_kind: str, owner_id: int) -> None:
        self.kind = kind
        self.searched_id = searched_id
        self.owner_kind = owner_kind
        self.owner_id = owner_id
        super().__init__(f"{owner_kind} {owner_id} has no {kind} with ID: {searched_id}")


class ScanError(CacheLayoutError):
    """A directory could not be read."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to scan directory {self.path}{detail}")


class UnknownVariantError(CacheLayoutError):
    """A payload matches none of the known endpoint shapes."""


class InvalidBasePathError(CacheLayoutError):
    """The cache base directory cannot be used."""
