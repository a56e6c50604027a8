"""
Layout views bound to a concrete model / version.

`ModelLayout` and `VersionLayout` combine the path builder with a parsed
catalog record to answer questions such as "where does file 123 go?" or
"which files of version 789 are already downloaded?".
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..catalog.entities import ModelCore, ModelFile, ModelImage, ModelVersionCore
from ..catalog.identifiers import recover_media_ids
from ..catalog.variants import ModelAny, ModelVersionAny, find_model_version
from ..errors import NotFoundError, ScanError
from .builder import FileLayoutBuilder
from .disk import path_exists
from .scanner import MediaFileInfo, MediaScanner

logger = logging.getLogger(__name__)

LayoutModel = Union[ModelAny, ModelCore]
LayoutVersion = Union[ModelVersionAny, ModelVersionCore]


class VersionLayout:
    """Paths and disk state of one version of a model."""

    def __init__(
        self, model: LayoutModel, version: LayoutVersion, base_path: Union[str, Path]
    ) -> None:
        self.model = model
        self.version = version
        self._builder = FileLayoutBuilder(base_path)
        # Media with a null id are resolved from their URL once; the ones
        # that cannot be resolved are not addressable by id.
        self._media: List[ModelImage] = recover_media_ids(version.images, version.id).media

    @property
    def builder(self) -> FileLayoutBuilder:
        return self._builder

    @property
    def media(self) -> List[ModelImage]:
        return list(self._media)

    def get_version_path(self) -> Path:
        return self._builder.get_version_path(self.model.type, self.model.id, self.version.id)

    def get_api_info_path(self) -> Path:
        return self._builder.get_version_api_info_path(
            self.model.type, self.model.id, self.version.id
        )

    def get_media_path(self) -> Path:
        return self._builder.get_version_media_path(
            self.model.type, self.model.id, self.version.id
        )

    def find_file(self, file_id: int) -> ModelFile:
        for file in self.version.files:
            if file.id == file_id:
                return file
        raise NotFoundError("file", file_id, "Version", self.version.id)

    def get_file_path(self, file_id: int) -> Path:
        file = self.find_file(file_id)
        return self._builder.get_model_file_path(
            self.model.type, self.model.id, self.version.id, file
        )

    def find_media(self, media_id: int) -> ModelImage:
        for image in self._media:
            if image.id == media_id:
                return image
        raise NotFoundError("media", media_id, "Version", self.version.id)

    def get_media_path_by_id(self, media_id: int) -> Path:
        """
        Raises:
            NotFoundError: no media item with `media_id`.
            UrlFilenameExtractionError: its URL carries no filename.
        """
        image = self.find_media(media_id)
        return self._builder.get_media_file_path(
            self.model.type, self.model.id, self.version.id, image
        )

    async def check_files_on_disk(self) -> List[int]:
        """
        Ids of this version's files that exist at their expected path.

        All files are checked concurrently; a failing check counts as
        "not present". The result keeps the version's file order.
        """
        expected: List[Tuple[int, Path]] = [
            (
                file.id,
                self._builder.get_model_file_path(
                    self.model.type, self.model.id, self.version.id, file
                ),
            )
            for file in self.version.files
        ]
        present = await asyncio.gather(*(path_exists(path) for _, path in expected))
        return [file_id for (file_id, _), exists in zip(expected, present) if exists]

    async def scan_media_files(self) -> List[MediaFileInfo]:
        return await MediaScanner.scan_media_directory(self.get_media_path())

    async def check_media_on_disk(self) -> List[int]:
        """Ids of this version's media items found in its media directory."""
        on_disk = {info.media_id for info in await self.scan_media_files()}
        return [image.id for image in self._media if image.id in on_disk]


class ModelLayout:
    """Paths and disk state of a model and its versions."""

    def __init__(self, model: LayoutModel, base_path: Union[str, Path]) -> None:
        self.model = model
        self._builder = FileLayoutBuilder(base_path)

    @property
    def builder(self) -> FileLayoutBuilder:
        return self._builder

    def get_model_path(self) -> Path:
        return self._builder.get_model_path(self.model.type, self.model.id)

    def get_api_info_path(self) -> Path:
        return self._builder.get_model_api_info_path(self.model.type, self.model.id)

    def find_version(self, version_id: int) -> LayoutVersion:
        version = find_model_version(self.model.model_versions, version_id)
        if version is None:
            raise NotFoundError("version", version_id, "Model", self.model.id)
        return version

    def get_version_layout(self, version_id: int) -> VersionLayout:
        return VersionLayout(self.model, self.find_version(version_id), self._builder.base_path)

    def version_layouts(self) -> List[VersionLayout]:
        return [
            VersionLayout(self.model, version, self._builder.base_path)
            for version in self.model.model_versions
        ]

    async def check_version_files_on_disk(self, version_id: int) -> List[int]:
        return await self.get_version_layout(version_id).check_files_on_disk()


@dataclass
class VersionDiskStatus:
    version_id: int
    files_on_disk: List[int] = field(default_factory=list)
    media_on_disk: List[int] = field(default_factory=list)


@dataclass
class DiskCheckReport:
    """Per-version disk state of a model; failed media scans are listed apart."""

    model_id: int
    versions: List[VersionDiskStatus] = field(default_factory=list)
    failures: Dict[int, ScanError] = field(default_factory=dict)


async def _version_disk_status(
    layout: VersionLayout,
) -> Tuple[VersionDiskStatus, Optional[ScanError]]:
    status = VersionDiskStatus(
        version_id=layout.version.id, files_on_disk=await layout.check_files_on_disk()
    )
    try:
        status.media_on_disk = await layout.check_media_on_disk()
    except ScanError as e:
        logger.warning("Media scan failed for version %s: %s", layout.version.id, e)
        return status, e
    return status, None


async def check_model_on_disk(model: LayoutModel, base_path: Union[str, Path]) -> DiskCheckReport:
    """Check every version of `model` concurrently."""
    layouts = ModelLayout(model, base_path).version_layouts()
    results = await asyncio.gather(*(_version_disk_status(layout) for layout in layouts))

    report = DiskCheckReport(model_id=model.id)
    for status, error in results:
        report.versions.append(status)
        if error is not None:
            report.failures[status.version_id] = error
    return report


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------
def create_file_layout_builder(base_path: Union[str, Path]) -> FileLayoutBuilder:
    return FileLayoutBuilder(base_path)


def create_model_layout(model: LayoutModel, base_path: Union[str, Path]) -> ModelLayout:
    return ModelLayout(model, base_path)


def create_version_layout(
    model: LayoutModel, version: LayoutVersion, base_path: Union[str, Path]
) -> VersionLayout:
    return VersionLayout(model, version, base_path)
