"""Tests del almacenamiento de imágenes en disco."""

import pytest

from perfume_catalog.services.file_storage_service import FileStorageService, is_safe_name
from perfume_catalog.services.result import ErrorKind

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def storage(tmp_path):
    return FileStorageService(tmp_path / "uploads")


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("3f2a.png", True),
        ("../etc/passwd", False),
        ("nested/file.png", False),
        ("nested\\file.png", False),
        (".upload-abc.tmp", False),
        (".hidden", False),
        ("", False),
        (None, False),
    ],
)
def test_is_safe_name(filename, expected):
    assert is_safe_name(filename) is expected


async def test_stored_file_resolves(storage):
    result = await storage.store("Logo.JPG", "image/jpeg", PNG_BYTES)

    assert result.ok
    assert result.value.endswith(".jpg")
    path = await storage.resolve(result.value)
    assert path is not None and path.read_bytes() == PNG_BYTES


async def test_in_flight_temp_file_is_not_resolved(storage):
    storage.upload_dir.mkdir(parents=True)
    (storage.upload_dir / ".upload-abc123.tmp").write_bytes(PNG_BYTES)

    assert await storage.resolve(".upload-abc123.tmp") is None
    assert (await storage.delete(".upload-abc123.tmp")).error.kind is ErrorKind.VALIDATION


async def test_store_rejects_empty_and_non_images(storage):
    empty = await storage.store("logo.png", "image/png", b"")
    text = await storage.store("notes.txt", "text/plain", b"hello")

    assert empty.error.message == "Please select a file to upload"
    assert text.error.message == "Only image files are allowed"
