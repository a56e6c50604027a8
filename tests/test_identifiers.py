import pytest

from civitai_cache.catalog.entities import ModelImage
from civitai_cache.catalog.identifiers import (
    extract_filename_from_url,
    extract_id_from_url,
    recover_media_ids,
    remove_file_extension,
)
from civitai_cache.errors import (
    ExtractionError,
    MalformedUrlError,
    NonNumericSegmentError,
    UrlFilenameExtractionError,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://host/abc/width=1024/1743606.jpeg", 1743606),
        ("https://image.civitai.com/xG1nkqKTMzGDvpLrqFT7WA/width=450/456.jpeg", 456),
        ("https://host/media/333", 333),
        ("https://host/media/0042.png", 42),
        ("https://host/media/12.mp4?token=abc#frag", 12),
        ("https://host/media/77.jpeg/", 77),
    ],
)
def test_extract_id_from_url(url: str, expected: int):
    assert extract_id_from_url(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://host/media/preview.jpeg",
        "https://host/media/12a.png",
        "https://host/media/-12.png",
        "https://host/media/1.2.png",
    ],
)
def test_extract_id_from_url_non_numeric(url: str):
    with pytest.raises(NonNumericSegmentError) as excinfo:
        extract_id_from_url(url)
    assert excinfo.value.url == url


@pytest.mark.parametrize("url", ["https://host", "https://host/", ""])
def test_extract_id_from_url_without_path(url: str):
    with pytest.raises(MalformedUrlError):
        extract_id_from_url(url)


def test_extract_filename_from_url():
    assert extract_filename_from_url("https://host/a/b/file%20name.png") == "file name.png"
    with pytest.raises(UrlFilenameExtractionError):
        extract_filename_from_url("https://host")


def test_remove_file_extension_strips_only_one_extension():
    assert remove_file_extension("1743606.jpeg") == "1743606"
    assert remove_file_extension("archive.tar.gz") == "archive.tar"
    assert remove_file_extension("333") == "333"
    # Dot-files have no extension to strip.
    assert remove_file_extension(".hidden") == ".hidden"


def test_recover_media_ids_keeps_existing_and_fills_missing():
    images = [
        ModelImage(id=1, url="https://host/x/999.jpeg"),
        ModelImage(id=None, url="https://host/x/width=1024/1743606.jpeg"),
    ]

    result = recover_media_ids(images, owner_id=789)

    assert result.ok
    # An existing id is never overwritten by the URL.
    assert [image.id for image in result.media] == [1, 1743606]
    assert result.media[0] is images[0]
    # The source record is not mutated.
    assert images[1].id is None


def test_recover_media_ids_reports_failures_without_dropping_siblings():
    images = [
        ModelImage(id=None, url="https://host/x/preview.jpeg"),
        ModelImage(id=None, url="https://host/x/222.png"),
        ModelImage(id=None, url="https://host"),
        ModelImage(id=5, url="https://host/x/5.png"),
    ]

    result = recover_media_ids(images)

    assert not result.ok
    assert [image.id for image in result.media] == [222, 5]
    assert [failure.position for failure in result.failures] == [0, 2]
    assert isinstance(result.failures[0].error, NonNumericSegmentError)
    assert isinstance(result.failures[1].error, MalformedUrlError)
    assert all(isinstance(f.error, ExtractionError) for f in result.failures)


def test_recover_media_ids_empty_batch():
    result = recover_media_ids([])
    assert result.media == []
    assert result.failures == []
