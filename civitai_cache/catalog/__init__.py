"""
Catalog records and the reconciliation of their endpoint variants.
"""

from .entities import (
    Creator,
    MediaKind,
    ModelByIdEndpointModel,
    ModelByIdVersion,
    ModelCore,
    ModelFile,
    ModelImage,
    ModelsEndpointModel,
    ModelShape,
    ModelStats,
    ModelsVersion,
    ModelVersionCore,
    ModelVersionEndpoint,
    ModelVersionStats,
    VersionShape,
)
from .identifiers import (
    MediaRecovery,
    MediaRecoveryFailure,
    extract_filename_from_url,
    extract_id_from_url,
    recover_media_ids,
    remove_file_extension,
)
from .variants import (
    ModelAny,
    ModelVersionAny,
    classify_model,
    classify_version,
    find_model,
    find_model_version,
    find_model_version_typed,
    get_availability,
    get_index,
    get_model_id,
    get_published_at,
    is_model_by_id_version,
    is_model_version_endpoint,
    is_models_version,
    parse_model,
    parse_version,
    to_model_core,
    to_version_core,
    with_single_version,
)

__all__ = [
    "Creator",
    "MediaKind",
    "MediaRecovery",
    "MediaRecoveryFailure",
    "ModelAny",
    "ModelByIdEndpointModel",
    "ModelByIdVersion",
    "ModelCore",
    "ModelFile",
    "ModelImage",
    "ModelShape",
    "ModelStats",
    "ModelVersionAny",
    "ModelVersionCore",
    "ModelVersionEndpoint",
    "ModelVersionStats",
    "ModelsEndpointModel",
    "ModelsVersion",
    "VersionShape",
    "classify_model",
    "classify_version",
    "extract_filename_from_url",
    "extract_id_from_url",
    "find_model",
    "find_model_version",
    "find_model_version_typed",
    "get_availability",
    "get_index",
    "get_model_id",
    "get_published_at",
    "is_model_by_id_version",
    "is_model_version_endpoint",
    "is_models_version",
    "parse_model",
    "parse_version",
    "recover_media_ids",
    "remove_file_extension",
    "to_model_core",
    "to_version_core",
    "with_single_version",
]
