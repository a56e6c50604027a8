"""
Reconciliation of the catalog's endpoint variants.

Payloads are classified by structure alone, never by the call that
produced them, since the same shape can come back from more than one
endpoint. Once parsed, the shape is fixed by the record's class
(`record.shape`) and the accessors below branch on it instead of probing
for fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar, Union

from ..errors import NotFoundError, UnknownVariantError
from .entities import (
    ModelBase,
    ModelByIdEndpointModel,
    ModelByIdVersion,
    ModelCore,
    ModelShape,
    ModelsEndpointModel,
    ModelsVersion,
    ModelVersionBase,
    ModelVersionCore,
    ModelVersionEndpoint,
    VersionShape,
)

ModelVersionAny = Union[ModelsVersion, ModelByIdVersion, ModelVersionEndpoint]
ModelAny = Union[ModelsEndpointModel, ModelByIdEndpointModel]

V = TypeVar("V", bound=ModelVersionBase)


def _has(payload: Mapping[str, Any], wire_name: str, field_name: str) -> bool:
    return wire_name in payload or field_name in payload


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------
def classify_version(payload: Mapping[str, Any]) -> VersionShape:
    """
    Classify a raw version payload.

    `modelId` marks the dedicated `/model-versions` shape; `index` together
    with `availability` marks the list/detail shape. The two list/detail
    shapes cannot be told apart structurally.
    """
    if _has(payload, "modelId", "model_id"):
        return VersionShape.STANDALONE
    if _has(payload, "index", "index") and _has(payload, "availability", "availability"):
        return VersionShape.INDEXED
    raise UnknownVariantError(
        f"Version payload {payload.get('id')!r} has neither 'modelId' nor 'index'/'availability'"
    )


def classify_model(payload: Mapping[str, Any]) -> ModelShape:
    """
    Classify a raw model payload by the shape of its first version.

    A model without versions cannot be classified from its structure and
    is treated as a detail response.
    """
    versions = payload.get("modelVersions", payload.get("model_versions")) or []
    if not versions:
        return ModelShape.DETAIL

    first = versions[0]
    if isinstance(first, ModelVersionBase):
        is_indexed = first.shape is VersionShape.INDEXED
    elif isinstance(first, Mapping):
        is_indexed = (
            not _has(first, "modelId", "model_id")
            and _has(first, "index", "index")
            and _has(first, "availability", "availability")
        )
    else:
        is_indexed = False
    return ModelShape.LIST if is_indexed else ModelShape.DETAIL


def parse_version(
    payload: Union[Mapping[str, Any], ModelVersionBase], *, in_detail: bool = False
) -> ModelVersionAny:
    """
    Build the typed variant for a version payload.

    `in_detail` selects `ModelByIdVersion` over `ModelsVersion` for
    list/detail-shaped payloads that were embedded in a `/models/{id}`
    response.
    """
    if isinstance(payload, ModelVersionBase):
        return payload  # type: ignore[return-value]

    shape = classify_version(payload)
    if shape is VersionShape.STANDALONE:
        return ModelVersionEndpoint.model_validate(payload)
    if in_detail:
        return ModelByIdVersion.model_validate(payload)
    return ModelsVersion.model_validate(payload)


def parse_model(payload: Union[Mapping[str, Any], ModelBase]) -> ModelAny:
    """Build the typed variant for a model payload."""
    if isinstance(payload, ModelBase):
        return payload  # type: ignore[return-value]

    if classify_model(payload) is ModelShape.LIST:
        return ModelsEndpointModel.model_validate(payload)
    return ModelByIdEndpointModel.model_validate(payload)


# -----------------------------------------------------------------------------
# Safe accessors
# -----------------------------------------------------------------------------
def get_model_id(version: ModelVersionAny) -> Optional[int]:
    if version.shape is VersionShape.STANDALONE:
        return version.model_id  # type: ignore[union-attr]
    return None


def get_index(version: ModelVersionAny) -> Optional[int]:
    if version.shape is VersionShape.INDEXED:
        return version.index  # type: ignore[union-attr]
    return None


def get_availability(version: ModelVersionAny) -> Optional[str]:
    if version.shape is VersionShape.INDEXED:
        return version.availability  # type: ignore[union-attr]
    return None


def get_published_at(version: ModelVersionAny) -> Optional[datetime]:
    """Publication time; `None` both for `null` and for a missing field."""
    return version.published_at


def is_models_version(version: Any) -> bool:
    return isinstance(version, ModelsVersion) and not isinstance(version, ModelByIdVersion)


def is_model_by_id_version(version: Any) -> bool:
    return isinstance(version, ModelByIdVersion)


def is_model_version_endpoint(version: Any) -> bool:
    return isinstance(version, ModelVersionEndpoint)


# -----------------------------------------------------------------------------
# Core projection
# -----------------------------------------------------------------------------
def to_version_core(version: ModelVersionAny) -> ModelVersionCore:
    """Project any version variant onto the fields all variants share."""
    return ModelVersionCore.model_validate(
        {name: getattr(version, name) for name in ModelVersionCore.model_fields}
    )


def to_model_core(model: ModelAny) -> ModelCore:
    """Project any model variant onto the fields both variants share."""
    fields = {
        name: getattr(model, name)
        for name in ModelCore.model_fields
        if name != "model_versions"
    }
    fields["model_versions"] = [to_version_core(v) for v in model.model_versions]
    return ModelCore.model_validate(fields)


# -----------------------------------------------------------------------------
# Lookup
# -----------------------------------------------------------------------------
def find_model_version(
    versions: Iterable[ModelVersionAny], version_id: int
) -> Optional[ModelVersionAny]:
    """
    Return the first version whose id equals `version_id`, or `None`.

    The collection may mix variants. When ids repeat, the earliest entry
    wins.
    """
    for version in versions:
        if version.id == version_id:
            return version
    return None


def find_model_version_typed(
    versions: Iterable[ModelVersionAny], version_id: int, variant: Type[V]
) -> Optional[V]:
    """Like `find_model_version`, restricted to instances of `variant`."""
    for version in versions:
        if isinstance(version, variant) and version.id == version_id:
            return version
    return None


def find_model(models: Iterable[ModelAny], model_id: int) -> Optional[ModelAny]:
    """Return the first model whose id equals `model_id`, or `None`."""
    for model in models:
        if model.id == model_id:
            return model
    return None


def with_single_version(model: ModelAny, version_id: int) -> ModelAny:
    """Copy of `model` whose `model_versions` holds only `version_id`."""
    version = find_model_version(model.model_versions, version_id)
    if version is None:
        raise NotFoundError("version", version_id, "Model", model.id)
    return model.model_copy(update={"model_versions": [version]})
