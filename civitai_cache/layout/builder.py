"""
Filesystem layout of the local model cache.

Every downloaded artefact lives at a path derived only from catalog
identifiers:

    <base>/<modelType>/<modelId>/<modelId>.api-info.json
    <base>/<modelType>/<modelId>/<versionId>/<versionId>.api-info.json
    <base>/<modelType>/<modelId>/<versionId>/<fileId>_<sanitizedFileName>
    <base>/<modelType>/<modelId>/<versionId>/media/<filenameFromUrl>

Each level embeds the identifier that is unique at that level, so two
different entities never share a path and the same entity always maps to
the same one.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Union

from ..catalog.entities import ModelFile, ModelImage
from ..catalog.identifiers import extract_filename_from_url
from ..errors import InvalidBasePathError

logger = logging.getLogger(__name__)

API_INFO_SUFFIX = ".api-info.json"
MEDIA_DIR_NAME = "media"
MAX_NAME_BYTES = 255

# Path separators, characters Windows rejects, and C0/C1 control characters.
_UNSAFE_CHARS_RE = re.compile(r'[/\\?<>:*|"\x00-\x1f\x7f-\x9f]')
_RESERVED_NAMES_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)


def get_api_info_json_file_name(entity_id: int) -> str:
    return f"{entity_id}{API_INFO_SUFFIX}"


def _truncate_bytes(name: str, max_bytes: int) -> str:
    """Trim `name` to `max_bytes` of UTF-8, keeping its extension when it fits."""
    if len(name.encode("utf-8")) <= max_bytes:
        return name
    stem, ext = os.path.splitext(name)
    if len(ext.encode("utf-8")) >= max_bytes:
        # No room for the stem; cut the whole name instead.
        stem, ext = name, ""
    budget = max_bytes - len(ext.encode("utf-8"))
    stem = stem.encode("utf-8")[:budget].decode("utf-8", errors="ignore")
    return f"{stem}{ext}"


def sanitize_file_name(name: str, max_bytes: int = MAX_NAME_BYTES) -> str:
    """
    Return a single, safe path component derived from `name`.

    Separators and reserved characters become `_`, trailing dots and
    spaces are dropped, `.`/`..` and Windows device names are defused and
    the result is capped at `max_bytes`. The extension is preserved unless
    it alone would not fit.
    """
    safe = _UNSAFE_CHARS_RE.sub("_", name)
    safe = safe.rstrip(". ")
    if not safe:
        safe = "_"
    if _RESERVED_NAMES_RE.match(safe):
        safe = f"_{safe}"
    safe = _truncate_bytes(safe, max_bytes)

    if safe != name:
        logger.warning("Sanitized unsafe file name %r -> %r", name, safe)
    return safe


class FileLayoutBuilder:
    """Computes cache paths below a single base directory."""

    def __init__(self, base_path: Union[str, Path]) -> None:
        if not str(base_path).strip():
            raise InvalidBasePathError("Cache base directory must not be empty")
        self._base_path = Path(os.path.normpath(base_path))

    @property
    def base_path(self) -> Path:
        return self._base_path

    def get_model_path(self, model_type: str, model_id: int) -> Path:
        return self._base_path / sanitize_file_name(model_type) / str(model_id)

    def get_version_path(self, model_type: str, model_id: int, version_id: int) -> Path:
        return self.get_model_path(model_type, model_id) / str(version_id)

    def get_version_media_path(self, model_type: str, model_id: int, version_id: int) -> Path:
        return self.get_version_path(model_type, model_id, version_id) / MEDIA_DIR_NAME

    def get_model_api_info_path(self, model_type: str, model_id: int) -> Path:
        return self.get_model_path(model_type, model_id) / get_api_info_json_file_name(model_id)

    def get_version_api_info_path(self, model_type: str, model_id: int, version_id: int) -> Path:
        return self.get_version_path(model_type, model_id, version_id) / get_api_info_json_file_name(
            version_id
        )

    def get_model_file_path(
        self, model_type: str, model_id: int, version_id: int, file: ModelFile
    ) -> Path:
        """Path of a downloadable file: `<fileId>_<sanitized display name>`."""
        prefix = f"{file.id}_"
        sanitized = sanitize_file_name(file.name, MAX_NAME_BYTES - len(prefix))
        return self.get_version_path(model_type, model_id, version_id) / f"{prefix}{sanitized}"

    def get_media_file_path(
        self, model_type: str, model_id: int, version_id: int, image: ModelImage
    ) -> Path:
        """
        Path of a media item, named after the last segment of its URL.

        Raises:
            UrlFilenameExtractionError: the URL carries no filename.
        """
        filename = extract_filename_from_url(image.url)
        media_dir = self.get_version_media_path(model_type, model_id, version_id)
        return media_dir / sanitize_file_name(filename)
