"""Tests for storage usage aggregation."""

import random
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.constants import STORAGE_QUOTA_BYTES
from app.exceptions import NotAuthenticated, OperationFailed
from app.schemas.files import FileRecord, FileType
from app.services.usage_service import UsageService, summarize_usage
from app.storage import DocumentList

T1 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
T2 = T1 + timedelta(hours=1)


def _record(file_type: str, size: int, updated_at: datetime, file_id: str = "f") -> FileRecord:
    return FileRecord(
        id=file_id,
        type=file_type,
        name=f"{file_id}.bin",
        extension="bin",
        url="http://localhost/view",
        size=size,
        owner="user-1",
        account_id="acc-1",
        blob_id=f"blob-{file_id}",
        created_at=T1,
        updated_at=updated_at,
    )


def test_summary_sums_sizes_and_keeps_latest_date():
    summary = summarize_usage([
        _record("image", 100, T1, "a"),
        _record("image", 50, T2, "b"),
    ])

    assert summary.image.size == 150
    assert summary.image.latest_date == T2
    assert summary.used == 150
    assert summary.all == 2 * 1024 ** 3
    for category in ("document", "video", "audio", "other"):
        bucket = getattr(summary, category)
        assert bucket.size == 0
        assert bucket.latest_date is None


def test_summary_serializes_empty_dates_as_blank():
    data = summarize_usage([_record("image", 100, T1)]).model_dump(by_alias=True)

    assert data["image"]["latestDate"] == T1.isoformat()
    assert data["video"] == {"size": 0, "latestDate": ""}
    assert data["all"] == STORAGE_QUOTA_BYTES


def test_empty_record_set():
    summary = summarize_usage([])

    assert summary.used == 0
    for file_type in FileType:
        bucket = getattr(summary, file_type.value)
        assert bucket.size == 0
        assert bucket.latest_date is None


def test_summary_independent_of_order():
    records = [
        _record(t, size, T1 + timedelta(minutes=size), f"f{size}")
        for t, size in [("image", 5), ("video", 7), ("image", 9), ("audio", 3), ("other", 11), ("video", 2)]
    ]
    expected = summarize_usage(records)

    shuffled = records[:]
    random.Random(42).shuffle(shuffled)
    assert summarize_usage(shuffled) == expected
    assert summarize_usage(reversed(records)) == expected


@pytest.mark.asyncio
async def test_total_space_used_requires_user(test_settings):
    service = UsageService(MagicMock(), test_settings)

    with pytest.raises(OperationFailed, match="Error calculating total space used") as exc_info:
        await service.get_total_space_used(None)
    assert isinstance(exc_info.value.__cause__, NotAuthenticated)


@pytest.mark.asyncio
async def test_total_space_used_reads_every_page(document_store, file_service, alice, user_factory, test_settings):
    bob = await user_factory("bob@example.com")
    for i in range(5):
        await file_service.upload(b"x" * (i + 1), f"photo{i}.png", alice.id, alice.account_id, "/")
    shared = await file_service.upload(b"y" * 100, "bob.mp3", bob.id, bob.account_id, "/")
    await file_service.update_access(shared.id, [alice.email], "/")

    # usage_page_size is 2 in tests, so 5 files take three pages
    summary = await UsageService(document_store, test_settings).get_total_space_used(alice)

    assert summary.image.size == 1 + 2 + 3 + 4 + 5
    assert summary.audio.size == 0
    assert summary.used == 15


@pytest.mark.asyncio
async def test_total_space_used_wraps_store_failure(test_settings, alice):
    store = MagicMock()
    store.list_documents = AsyncMock(side_effect=RuntimeError("boom"))

    with pytest.raises(OperationFailed):
        await UsageService(store, test_settings).get_total_space_used(alice)


@pytest.mark.asyncio
async def test_total_space_used_stops_on_empty_page(test_settings, alice):
    store = MagicMock()
    store.list_documents = AsyncMock(return_value=DocumentList(total=10, documents=[]))

    summary = await UsageService(store, test_settings).get_total_space_used(alice)

    assert summary.used == 0
    store.list_documents.assert_awaited_once()
