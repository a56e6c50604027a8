"""
FastAPI app exposing the cache layout to the UI / persistence services.

Endpoints:
- GET /health
- POST /versions/reconcile
- POST /models/reconcile
- POST /models/layout
- POST /models/disk-status
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .catalog.identifiers import recover_media_ids
from .catalog.variants import (
    ModelAny,
    ModelVersionAny,
    get_availability,
    get_index,
    get_model_id,
    get_published_at,
    parse_model,
    parse_version,
    to_model_core,
    to_version_core,
)
from .config import CACHE_ROOT
from .errors import UnknownVariantError, UrlFilenameExtractionError
from .layout.builder import FileLayoutBuilder
from .layout.facades import ModelLayout, check_model_on_disk
from .schemas import (
    DiskStatusResponse,
    FilePath,
    HealthResponse,
    MediaPath,
    ModelLayoutResponse,
    ModelReconcileResponse,
    VersionDiskState,
    VersionPaths,
    VersionReconcileResponse,
)

app = FastAPI(
    title="Civitai Cache Layout Service",
    version="0.1.0",
    description="Reconciles Civitai catalog payloads and maps them onto the local model cache.",
)

# Permissive CORS for the local UI.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Attach the path builder to app state for reuse.
app.state.builder = FileLayoutBuilder(CACHE_ROOT)


def _parse_version(payload: Dict[str, Any]) -> ModelVersionAny:
    try:
        return parse_version(payload)
    except (UnknownVariantError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))


def _parse_model(payload: Dict[str, Any]) -> ModelAny:
    try:
        return parse_model(payload)
    except (UnknownVariantError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))


def _model_layout(model: ModelAny) -> ModelLayout:
    builder: FileLayoutBuilder = app.state.builder
    return ModelLayout(model, builder.base_path)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    builder: FileLayoutBuilder = app.state.builder
    return HealthResponse(status="ok", cache_root=str(builder.base_path))


@app.post("/versions/reconcile", response_model=VersionReconcileResponse)
async def reconcile_version(payload: Dict[str, Any] = Body(...)) -> VersionReconcileResponse:
    """Classify a version payload and project it onto the core record."""
    version = _parse_version(payload)
    recovery = recover_media_ids(version.images, version.id)

    return VersionReconcileResponse(
        shape=version.shape,
        core=to_version_core(version).model_copy(update={"images": recovery.media}),
        model_id=get_model_id(version),
        index=get_index(version),
        availability=get_availability(version),
        published_at=get_published_at(version),
        unresolved_media=[failure.url for failure in recovery.failures],
    )


@app.post("/models/reconcile", response_model=ModelReconcileResponse)
async def reconcile_model(payload: Dict[str, Any] = Body(...)) -> ModelReconcileResponse:
    """Classify a model payload and project it onto the core record."""
    model = _parse_model(payload)
    return ModelReconcileResponse(shape=model.shape, core=to_model_core(model))


@app.post("/models/layout", response_model=ModelLayoutResponse)
async def model_layout(payload: Dict[str, Any] = Body(...)) -> ModelLayoutResponse:
    """Expected cache paths of a model, its versions, files and media."""
    layout = _model_layout(_parse_model(payload))

    versions = []
    for version_layout in layout.version_layouts():
        files = [
            FilePath(file_id=file.id, path=str(version_layout.get_file_path(file.id)))
            for file in version_layout.version.files
        ]
        media = []
        for image in version_layout.media:
            try:
                path = str(version_layout.get_media_path_by_id(image.id))
            except UrlFilenameExtractionError:
                path = None
            media.append(MediaPath(media_id=image.id, path=path))

        versions.append(
            VersionPaths(
                version_id=version_layout.version.id,
                version_path=str(version_layout.get_version_path()),
                api_info_path=str(version_layout.get_api_info_path()),
                media_path=str(version_layout.get_media_path()),
                files=files,
                media=media,
            )
        )

    return ModelLayoutResponse(
        model_id=layout.model.id,
        model_path=str(layout.get_model_path()),
        api_info_path=str(layout.get_api_info_path()),
        versions=versions,
    )


@app.post("/models/disk-status", response_model=DiskStatusResponse)
async def model_disk_status(payload: Dict[str, Any] = Body(...)) -> DiskStatusResponse:
    """
    Which files and media of each version are already in the cache.

    A version whose media directory cannot be read still reports its
    files; the scan error is returned alongside instead of failing the
    whole request.
    """
    model = _parse_model(payload)
    builder: FileLayoutBuilder = app.state.builder
    report = await check_model_on_disk(model, builder.base_path)

    return DiskStatusResponse(
        model_id=report.model_id,
        versions=[
            VersionDiskState(
                version_id=status.version_id,
                files_on_disk=status.files_on_disk,
                media_on_disk=status.media_on_disk,
                error=str(report.failures[status.version_id])
                if status.version_id in report.failures
                else None,
            )
            for status in report.versions
        ],
    )


def run() -> None:
    """Serve the cache API on port 8080 with logging configured from the environment."""
    import uvicorn

    from .config import configure_logging

    configure_logging()
    uvicorn.run(
        "civitai_cache.main:app",
        host="0.0.0.0",
        port=8080,
        reload=False,
    )


if __name__ == "__main__":
    run()
