"""Pytest fixtures: catalog payloads as returned by the different endpoints."""

import copy

import pytest

FILE_PAYLOAD = {
    "id": 123,
    "sizeKB": 1024,
    "name": "test model.safetensors",
    "type": "Model",
    "metadata": {"format": "SafeTensor"},
    "downloadUrl": "https://civitai.com/api/download/models/789",
}

IMAGE_PAYLOAD = {
    "id": 456,
    "url": "https://image.civitai.com/xG1nkqKTMzGDvpLrqFT7WA/width=450/456.jpeg",
    "nsfwLevel": 1,
    "width": 512,
    "height": 512,
    "hash": "abc123",
    "type": "image",
}

NULL_ID_IMAGE_PAYLOAD = {
    "id": None,
    "url": "https://image.civitai.com/xG1nkqKTMzGDvpLrqFT7WA/9f1c/width=1024/1743606.jpeg",
    "nsfwLevel": 2,
    "width": 1024,
    "height": 1536,
    "hash": "def456",
    "type": "image",
}

_VERSION_COMMON = {
    "id": 789,
    "name": "v1.0",
    "baseModel": "SD 1.5",
    "baseModelType": "Standard",
    "publishedAt": "2024-01-01T00:00:00Z",
    "nsfwLevel": 1,
    "description": "Test version",
    "stats": {"downloadCount": 500, "thumbsUpCount": 25, "rating": 4.5},
    "trainedWords": ["test"],
}


@pytest.fixture
def file_payload() -> dict:
    return copy.deepcopy(FILE_PAYLOAD)


@pytest.fixture
def image_payload() -> dict:
    return copy.deepcopy(IMAGE_PAYLOAD)


@pytest.fixture
def null_id_image_payload() -> dict:
    return copy.deepcopy(NULL_ID_IMAGE_PAYLOAD)


@pytest.fixture
def list_version_payload() -> dict:
    """Version as embedded in `/models` and `/models/{id}` responses."""
    return {
        **copy.deepcopy(_VERSION_COMMON),
        "index": 0,
        "availability": "Public",
        "files": [copy.deepcopy(FILE_PAYLOAD)],
        "images": [copy.deepcopy(IMAGE_PAYLOAD), copy.deepcopy(NULL_ID_IMAGE_PAYLOAD)],
    }


@pytest.fixture
def endpoint_version_payload() -> dict:
    """Version as returned by `/model-versions/{id}`."""
    return {
        **copy.deepcopy(_VERSION_COMMON),
        "modelId": 456,
        "files": [copy.deepcopy(FILE_PAYLOAD)],
        "images": [copy.deepcopy(IMAGE_PAYLOAD)],
    }


@pytest.fixture
def model_payload(list_version_payload: dict) -> dict:
    """Model as returned by `/models` or `/models/{id}`."""
    return {
        "id": 456,
        "name": "Test Model",
        "description": "A test model",
        "type": "Checkpoint",
        "poi": False,
        "nsfw": False,
        "nsfwLevel": 1,
        "stats": {
            "downloadCount": 1000,
            "thumbsUpCount": 50,
            "thumbsDownCount": 2,
            "commentCount": 10,
            "tippedAmountCount": 5,
        },
        "tags": ["test", "ai"],
        "creator": {"username": "tester", "image": None},
        "modelVersions": [list_version_payload],
    }
