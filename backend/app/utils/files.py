"""File naming, typing and size formatting helpers."""

from __future__ import annotations

from app.config import Settings
from app.constants import STORAGE_QUOTA_BYTES
from app.schemas.files import FileType

_EXTENSIONS: dict[FileType, frozenset[str]] = {
    FileType.DOCUMENT: frozenset({
        "pdf", "doc", "docx", "txt", "xls", "xlsx", "csv", "rtf", "ods", "ppt",
        "odp", "md", "html", "htm", "epub", "pages", "fig", "psd", "ai", "indd",
        "xd", "sketch", "afdesign", "afphoto",
    }),
    FileType.IMAGE: frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp"}),
    FileType.VIDEO: frozenset({"mp4", "avi", "mov", "mkv", "webm"}),
    FileType.AUDIO: frozenset({"mp3", "wav", "ogg", "flac"}),
}


def get_file_type(filename: str) -> tuple[FileType, str]:
    """Return ``(type, extension)`` for a file name; extension is lower-cased."""
    if "." not in filename:
        return FileType.OTHER, ""
    extension = filename.rsplit(".", 1)[1].lower()
    for file_type, extensions in _EXTENSIONS.items():
        if extension in extensions:
            return file_type, extension
    return FileType.OTHER, extension


def construct_file_url(blob_id: str, settings: Settings) -> str:
    """Public view URL of a blob, derived only from its id."""
    if settings.is_local_backend:
        base = f"{settings.public_url.rstrip('/')}{settings.api_prefix}"
        return f"{base}/storage/buckets/{settings.bucket_id}/files/{blob_id}/view"
    return (
        f"{settings.appwrite_endpoint.rstrip('/')}/storage/buckets/{settings.bucket_id}"
        f"/files/{blob_id}/view?project={settings.appwrite_project_id}"
    )


def convert_file_size(size_in_bytes: int, digits: int = 1) -> str:
    """Human-readable size: ``512 Bytes``, ``1.5 KB``, ``2.0 GB``."""
    if size_in_bytes < 1024:
        return f"{size_in_bytes} Bytes"
    if size_in_bytes < 1024 ** 2:
        return f"{size_in_bytes / 1024:.{digits}f} KB"
    if size_in_bytes < 1024 ** 3:
        return f"{size_in_bytes / 1024 ** 2:.{digits}f} MB"
    return f"{size_in_bytes / 1024 ** 3:.{digits}f} GB"


def calculate_percentage(size_in_bytes: int, total_bytes: int = STORAGE_QUOTA_BYTES) -> float:
    return round(size_in_bytes / total_bytes * 100, 2)
