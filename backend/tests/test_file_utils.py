"""Tests for file naming and size helpers."""

import pytest

from app.schemas.files import FileType
from app.utils.files import calculate_percentage, construct_file_url, convert_file_size, get_file_type


@pytest.mark.parametrize(
    "name,expected",
    [
        ("cat.PNG", (FileType.IMAGE, "png")),
        ("report.final.pdf", (FileType.DOCUMENT, "pdf")),
        ("clip.mkv", (FileType.VIDEO, "mkv")),
        ("song.flac", (FileType.AUDIO, "flac")),
        ("archive.zip", (FileType.OTHER, "zip")),
        ("Makefile", (FileType.OTHER, "")),
    ],
)
def test_get_file_type(name, expected):
    assert get_file_type(name) == expected


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 Bytes"),
        (1023, "1023 Bytes"),
        (1536, "1.5 KB"),
        (5 * 1024 ** 2, "5.0 MB"),
        (3 * 1024 ** 3, "3.0 GB"),
    ],
)
def test_convert_file_size(size, expected):
    assert convert_file_size(size) == expected


def test_convert_file_size_digits():
    assert convert_file_size(1536, digits=2) == "1.50 KB"


def test_calculate_percentage():
    assert calculate_percentage(1024 ** 3) == 50.0
    assert calculate_percentage(1, 3) == 33.33


def test_construct_file_url_remote(test_settings):
    remote = test_settings.model_copy(update={
        "storage_backend": "appwrite",
        "appwrite_endpoint": "https://cloud.example.com/v1",
        "appwrite_project_id": "proj",
        "bucket_id": "bucket",
    })
    assert construct_file_url("abc", remote) == (
        "https://cloud.example.com/v1/storage/buckets/bucket/files/abc/view?project=proj"
    )


def test_construct_file_url_local(test_settings):
    url = construct_file_url("abc", test_settings)
    assert url.endswith("/api/storage/buckets/files/files/abc/view")
