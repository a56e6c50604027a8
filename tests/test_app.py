from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from civitai_cache.layout.builder import FileLayoutBuilder
from civitai_cache.main import app
from civitai_cache.schemas import HealthResponse


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    # Root the cache in a temp dir to avoid touching real paths.
    app.state.builder = FileLayoutBuilder(tmp_path)
    return TestClient(app)


def test_health_endpoint(client: TestClient, tmp_path: Path):
    resp = client.get("/health")
    assert resp.status_code == 200

    # Validate shape using the pydantic model.
    health = HealthResponse(**resp.json())
    assert health.status == "ok"
    assert health.cache_root == str(tmp_path)


def test_reconcile_list_version(client: TestClient, list_version_payload: dict):
    resp = client.post("/versions/reconcile", json=list_version_payload)
    assert resp.status_code == 200

    data = resp.json()
    assert data["shape"] == "indexed"
    assert data["index"] == 0
    assert data["availability"] == "Public"
    assert data["model_id"] is None
    assert data["core"]["id"] == 789
    assert data["core"]["baseModel"] == "SD 1.5"
    assert "index" not in data["core"]
    # The null-id image comes back with the id recovered from its URL.
    assert [image["id"] for image in data["core"]["images"]] == [456, 1743606]
    assert data["unresolved_media"] == []


def test_reconcile_endpoint_version(client: TestClient, endpoint_version_payload: dict):
    endpoint_version_payload["images"].append(
        {"id": None, "url": "https://image.civitai.com/x/preview.jpeg"}
    )
    resp = client.post("/versions/reconcile", json=endpoint_version_payload)
    assert resp.status_code == 200

    data = resp.json()
    assert data["shape"] == "standalone"
    assert data["model_id"] == 456
    assert data["index"] is None
    assert data["availability"] is None
    assert [image["id"] for image in data["core"]["images"]] == [456]
    assert data["unresolved_media"] == ["https://image.civitai.com/x/preview.jpeg"]


def test_reconcile_unknown_version_shape(client: TestClient, list_version_payload: dict):
    del list_version_payload["index"]
    resp = client.post("/versions/reconcile", json=list_version_payload)
    assert resp.status_code == 422


def test_reconcile_model(client: TestClient, model_payload: dict):
    resp = client.post("/models/reconcile", json=model_payload)
    assert resp.status_code == 200

    data = resp.json()
    assert data["shape"] == "list"
    assert data["core"]["id"] == 456
    assert data["core"]["type"] == "Checkpoint"
    assert [v["id"] for v in data["core"]["modelVersions"]] == [789]


def test_reconcile_invalid_model(client: TestClient, model_payload: dict):
    del model_payload["name"]
    resp = client.post("/models/reconcile", json=model_payload)
    assert resp.status_code == 422


def test_model_layout(client: TestClient, model_payload: dict, tmp_path: Path):
    resp = client.post("/models/layout", json=model_payload)
    assert resp.status_code == 200

    data = resp.json()
    model_dir = tmp_path / "Checkpoint" / "456"
    assert data["model_path"] == str(model_dir)
    assert data["api_info_path"] == str(model_dir / "456.api-info.json")

    version = data["versions"][0]
    assert version["version_id"] == 789
    assert version["media_path"] == str(model_dir / "789" / "media")
    assert version["files"] == [
        {"file_id": 123, "path": str(model_dir / "789" / "123_test model.safetensors")}
    ]
    assert [m["media_id"] for m in version["media"]] == [456, 1743606]
    assert version["media"][1]["path"] == str(model_dir / "789" / "media" / "1743606.jpeg")


def test_model_disk_status(client: TestClient, model_payload: dict, tmp_path: Path):
    version_dir = tmp_path / "Checkpoint" / "456" / "789"
    (version_dir / "media").mkdir(parents=True)
    (version_dir / "123_test model.safetensors").write_bytes(b"weights")
    (version_dir / "media" / "1743606.jpeg").write_bytes(b"")

    resp = client.post("/models/disk-status", json=model_payload)
    assert resp.status_code == 200

    data = resp.json()
    assert data["model_id"] == 456
    assert data["versions"] == [
        {"version_id": 789, "files_on_disk": [123], "media_on_disk": [1743606], "error": None}
    ]


def test_model_disk_status_empty_cache(client: TestClient, model_payload: dict):
    resp = client.post("/models/disk-status", json=model_payload)
    assert resp.status_code == 200
    assert resp.json()["versions"][0]["files_on_disk"] == []
