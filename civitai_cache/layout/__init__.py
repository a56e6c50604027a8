"""
On-disk layout of the model cache: path building, media scanning and
disk-presence checks.
"""

from .builder import FileLayoutBuilder, get_api_info_json_file_name, sanitize_file_name
from .disk import check_if_model_version_on_disk, has_safetensors_file, path_exists, scan_model_files
from .facades import (
    DiskCheckReport,
    ModelLayout,
    VersionDiskStatus,
    VersionLayout,
    check_model_on_disk,
    create_file_layout_builder,
    create_model_layout,
    create_version_layout,
)
from .scanner import MediaFileInfo, MediaScanner, extract_media_id_from_filename

__all__ = [
    "DiskCheckReport",
    "FileLayoutBuilder",
    "MediaFileInfo",
    "MediaScanner",
    "ModelLayout",
    "VersionDiskStatus",
    "VersionLayout",
    "check_if_model_version_on_disk",
    "check_model_on_disk",
    "create_file_layout_builder",
    "create_model_layout",
    "create_version_layout",
    "extract_media_id_from_filename",
    "get_api_info_json_file_name",
    "has_safetensors_file",
    "path_exists",
    "sanitize_file_name",
    "scan_model_files",
]
