"""Storage usage accounting — per-category totals for one user."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from app.config import Settings
from app.exceptions import NotAuthenticated, handle_error
from app.schemas.auth import CurrentUser
from app.schemas.files import FileRecord, FileType
from app.schemas.usage import CategoryUsage, UsageSummary
from app.storage import DocumentStore
from app.storage.query import Query

logger = logging.getLogger(__name__)


def summarize_usage(records: Iterable[FileRecord]) -> UsageSummary:
    """Fold file records into a UsageSummary.

    The result does not depend on record order: sizes are summed and each
    bucket keeps the strictly latest ``updated_at`` it has seen.
    """
    buckets: dict[FileType, CategoryUsage] = {t: CategoryUsage() for t in FileType}
    used = 0

    for record in records:
        bucket = buckets[record.type]
        bucket.size += record.size
        used += record.size
        if bucket.latest_date is None or record.updated_at > bucket.latest_date:
            bucket.latest_date = record.updated_at

    return UsageSummary(**{t.value: bucket for t, bucket in buckets.items()}, used=used)


class UsageService:
    def __init__(self, documents: DocumentStore, settings: Settings):
        self._documents = documents
        self._settings = settings

    async def _owned_files(self, owner_id: str) -> list[FileRecord]:
        """All files owned by ``owner_id``, read page by page."""
        page_size = self._settings.usage_page_size
        records: list[FileRecord] = []
        while True:
            page = await self._documents.list_documents(
                self._settings.database_id,
                self._settings.files_collection_id,
                [
                    Query.equal("owner", [owner_id]),
                    Query.order_asc("id"),
                    Query.limit(page_size),
                    Query.offset(len(records)),
                ],
            )
            records.extend(FileRecord.model_validate(doc) for doc in page.documents)
            if not page.documents or len(records) >= page.total:
                return records

    async def get_total_space_used(self, current_user: CurrentUser | None) -> UsageSummary:
        try:
            if current_user is None:
                raise NotAuthenticated("User is not authenticated.")

            records = await self._owned_files(current_user.id)
            summary = summarize_usage(records)
            logger.debug("Usage for %s: %d bytes in %d files", current_user.id, summary.used, len(records))
            return summary
        except Exception as error:
            handle_error(error, "Error calculating total space used")
