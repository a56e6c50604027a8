"""
Pydantic records for the Civitai catalog payloads.

The catalog API returns the same logical entities in several shapes
depending on the endpoint that produced them:

- `/models` (list) -> `ModelsEndpointModel` holding `ModelsVersion` items
- `/models/{id}` (detail) -> `ModelByIdEndpointModel` holding
  `ModelByIdVersion` items
- `/model-versions/{id}` -> `ModelVersionEndpoint`

Field names follow the snake_case Python convention; the camelCase wire
names are accepted (and produced with `by_alias=True`) through aliases.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VersionShape(str, Enum):
    """Structural category of a model version payload."""

    # `/models` and `/models/{id}`: carries `index` and `availability`
    INDEXED = "indexed"
    # `/model-versions/{id}`: carries `modelId`
    STANDALONE = "standalone"


class ModelShape(str, Enum):
    """Structural category of a model payload."""

    LIST = "list"
    DETAIL = "detail"


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class CatalogRecord(BaseModel):
    """Base for every catalog record: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
        protected_namespaces=(),
    )


class ModelFile(CatalogRecord):
    """
    A downloadable file attached to a model version.

    - id: file identifier
    - size_kb: size in kilobytes (`sizeKB` on the wire)
    - name: display name, used (sanitized) as part of the on-disk name
    - type: file type tag, e.g. "Model", "Training Data"
    - download_url: direct download URL
    """

    id: int
    size_kb: float = Field(..., alias="sizeKB")
    name: str
    type: str
    download_url: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    hashes: Dict[str, str] = Field(default_factory=dict)
    primary: Optional[bool] = None


class ModelImage(CatalogRecord):
    """
    A preview media item (image or video) of a model version.

    `id` may be null when the item comes from the model endpoints; use
    `civitai_cache.catalog.identifiers.recover_media_ids` to fill it in
    from the URL.
    """

    id: Optional[int] = None
    url: str
    nsfw_level: int = 0
    width: int = 0
    height: int = 0
    hash: Optional[str] = None
    type: MediaKind = MediaKind.IMAGE


class ModelVersionStats(CatalogRecord):
    download_count: int = 0
    rating_count: int = 0
    rating: float = 0.0
    thumbs_up_count: int = 0
    thumbs_down_count: int = 0


class ModelStats(CatalogRecord):
    download_count: int = 0
    favorite_count: int = 0
    thumbs_up_count: int = 0
    thumbs_down_count: int = 0
    comment_count: int = 0
    rating_count: int = 0
    rating: float = 0.0
    tipped_amount_count: int = 0


class Creator(CatalogRecord):
    username: Optional[str] = None
    image: Optional[str] = None


class ModelVersionBase(CatalogRecord):
    """Fields shared by every version variant."""

    shape: ClassVar[VersionShape]

    id: int
    name: str
    base_model: str
    base_model_type: Optional[str] = None
    published_at: Optional[datetime] = None
    nsfw_level: int = 0
    description: Optional[str] = None
    stats: ModelVersionStats = Field(default_factory=ModelVersionStats)
    files: List[ModelFile] = Field(default_factory=list)
    images: List[ModelImage] = Field(default_factory=list)
    trained_words: List[str] = Field(default_factory=list)
    download_url: Optional[str] = None


class ModelsVersion(ModelVersionBase):
    """Version as embedded in a `/models` list response."""

    shape: ClassVar[VersionShape] = VersionShape.INDEXED

    index: int
    availability: str


class ModelByIdVersion(ModelsVersion):
    """Version as embedded in a `/models/{id}` detail response."""


class ModelVersionEndpoint(ModelVersionBase):
    """Version as returned by `/model-versions/{id}`."""

    shape: ClassVar[VersionShape] = VersionShape.STANDALONE

    model_id: int


class ModelVersionCore(CatalogRecord):
    """Fields guaranteed present on every version variant."""

    id: int
    name: str
    base_model: str
    base_model_type: Optional[str] = None
    published_at: Optional[datetime] = None
    nsfw_level: int = 0
    description: Optional[str] = None
    stats: ModelVersionStats = Field(default_factory=ModelVersionStats)
    files: List[ModelFile] = Field(default_factory=list)
    images: List[ModelImage] = Field(default_factory=list)


class ModelBase(CatalogRecord):
    """Fields shared by both model variants."""

    shape: ClassVar[ModelShape]

    id: int
    name: str
    description: Optional[str] = None
    type: str
    poi: bool = False
    nsfw: bool = False
    nsfw_level: int = 0
    tags: List[str] = Field(default_factory=list)
    creator: Optional[Creator] = None
    stats: ModelStats = Field(default_factory=ModelStats)


class ModelsEndpointModel(ModelBase):
    """Model as returned by the `/models` list endpoint."""

    shape: ClassVar[ModelShape] = ModelShape.LIST

    model_versions: List[ModelsVersion] = Field(default_factory=list)


class ModelByIdEndpointModel(ModelBase):
    """Model as returned by the `/models/{id}` detail endpoint."""

    shape: ClassVar[ModelShape] = ModelShape.DETAIL

    model_versions: List[ModelByIdVersion] = Field(default_factory=list)


class ModelCore(CatalogRecord):
    """Fields guaranteed present on both model variants."""

    id: int
    name: str
    type: str
    nsfw: bool = False
    nsfw_level: int = 0
    tags: List[str] = Field(default_factory=list)
    creator: Optional[Creator] = None
    model_versions: List[ModelVersionCore] = Field(default_factory=list)
