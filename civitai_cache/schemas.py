"""
Pydantic schemas used by the FastAPI app.

Request bodies are raw catalog payloads (plain JSON objects) and are
classified by `civitai_cache.catalog.variants`; only the responses are
described here. Embedded catalog records keep their camelCase wire names.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .catalog.entities import ModelCore, ModelShape, ModelVersionCore, VersionShape


class HealthResponse(BaseModel):
    """Liveness plus the cache root the service writes under."""

    status: str
    cache_root: str


class VersionReconcileResponse(BaseModel):
    """
    Response payload for POST /versions/reconcile.

    - shape: structural category of the submitted version
    - core: fields shared by every version variant
    - model_id / index / availability / published_at: variant-only fields,
      `null` when the submitted shape does not carry them
    - unresolved_media: URLs of media items whose id could not be recovered
    """

    model_config = ConfigDict(protected_namespaces=())

    shape: VersionShape
    core: ModelVersionCore
    model_id: Optional[int] = None
    index: Optional[int] = None
    availability: Optional[str] = None
    published_at: Optional[datetime] = None
    unresolved_media: List[str] = []


class ModelReconcileResponse(BaseModel):
    """Response payload for POST /models/reconcile."""

    shape: ModelShape
    core: ModelCore


class FilePath(BaseModel):
    file_id: int
    path: str


class MediaPath(BaseModel):
    """`path` is null when the media URL carries no filename."""

    media_id: int
    path: Optional[str] = None


class VersionPaths(BaseModel):
    version_id: int
    version_path: str
    api_info_path: str
    media_path: str
    files: List[FilePath] = []
    media: List[MediaPath] = []


class ModelLayoutResponse(BaseModel):
    """Response payload for POST /models/layout."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: int
    model_path: str
    api_info_path: str
    versions: List[VersionPaths] = []


class VersionDiskState(BaseModel):
    """
    Disk state of one version.

    - files_on_disk: ids of files found at their expected path
    - media_on_disk: ids of media items found in the media directory
    - error: set when the media directory could not be read
    """

    version_id: int
    files_on_disk: List[int] = []
    media_on_disk: List[int] = []
    error: Optional[str] = None


class DiskStatusResponse(BaseModel):
    """Response payload for POST /models/disk-status."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: int
    versions: List[VersionDiskState] = []
