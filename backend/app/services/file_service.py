"""File records — metadata documents kept in step with their blobs."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.config import Settings
from app.constants import DEFAULT_SORT
from app.exceptions import CompensationFailure, NotAuthenticated, handle_error
from app.schemas.auth import CurrentUser
from app.schemas.files import DeleteResult, FileList, FileRecord
from app.services.query_builder import build_file_queries
from app.services.revalidation import PathRevalidator
from app.storage import BlobStore, DocumentStore, new_id
from app.utils.files import construct_file_url, get_file_type

logger = logging.getLogger(__name__)


class FileService:
    """Create, list, rename, share and delete file records.

    Every record has exactly one blob. Upload writes the blob first and
    removes it again if the record cannot be written; delete removes the
    record first and the blob only afterwards. All public methods either
    succeed completely or raise ``OperationFailed``.
    """

    def __init__(
        self,
        documents: DocumentStore,
        blobs: BlobStore,
        settings: Settings,
        revalidator: PathRevalidator | None = None,
    ):
        self._documents = documents
        self._blobs = blobs
        self._settings = settings
        self._revalidator = revalidator or PathRevalidator()

    @property
    def _collection(self) -> tuple[str, str]:
        return self._settings.database_id, self._settings.files_collection_id

    async def upload(
        self,
        file_bytes: bytes,
        filename: str,
        owner_id: str,
        account_id: str,
        path: str,
    ) -> FileRecord:
        try:
            blob = await self._blobs.create_file(
                self._settings.bucket_id, new_id(), file_bytes, filename
            )
            file_type, extension = get_file_type(blob.name)
            document = {
                "type": file_type.value,
                "name": blob.name,
                "url": construct_file_url(blob.id, self._settings),
                "extension": extension,
                "size": blob.size,
                "owner": owner_id,
                "accountId": account_id,
                "users": [],
                "blobId": blob.id,
            }

            try:
                created = await self._documents.create_document(*self._collection, new_id(), document)
            except Exception as error:
                await self._discard_blob(blob.id)
                handle_error(error, "Failed to create file document")

            logger.info("Uploaded %s (%d bytes) for owner %s", blob.name, blob.size, owner_id)
            record = FileRecord.model_validate(created)
        except Exception as error:
            handle_error(error, "Failed to upload file")

        await self._refresh(path)
        return record

    async def _refresh(self, path: str) -> None:
        """Ask the frontend to refresh a path once the write has committed."""
        try:
            await self._revalidator.revalidate(path)
        except Exception as exc:
            logger.warning("Revalidate %s failed: %s", path, exc)

    async def _discard_blob(self, blob_id: str) -> None:
        """Remove a blob whose record could not be written."""
        try:
            await self._blobs.delete_file(self._settings.bucket_id, blob_id)
            logger.info("Removed orphaned blob %s", blob_id)
        except Exception as exc:
            failure = CompensationFailure(f"Orphaned blob {blob_id} could not be removed")
            failure.__cause__ = exc
            logger.error("%s: %s", failure, exc, exc_info=failure)

    async def list_files(
        self,
        current_user: CurrentUser | None,
        types: Sequence[str] = (),
        search_text: str = "",
        sort: str = DEFAULT_SORT,
        limit: int | None = None,
    ) -> FileList:
        try:
            if current_user is None:
                raise NotAuthenticated("User not found")

            queries = build_file_queries(current_user, types, search_text, sort, limit)
            result = await self._documents.list_documents(*self._collection, queries)
            return FileList(
                total=result.total,
                documents=[FileRecord.model_validate(doc) for doc in result.documents],
            )
        except Exception as error:
            handle_error(error, "Failed to get files")

    async def rename(self, file_id: str, name: str, extension: str, path: str) -> FileRecord:
        try:
            updated = await self._documents.update_document(
                *self._collection, file_id, {"name": f"{name}.{extension}"}
            )
            record = FileRecord.model_validate(updated)
        except Exception as error:
            handle_error(error, "Failed to rename file")

        await self._refresh(path)
        return record

    async def update_access(self, file_id: str, emails: Sequence[str], path: str) -> FileRecord:
        """Replace the set of users the file is shared with."""
        try:
            updated = await self._documents.update_document(
                *self._collection, file_id, {"users": list(emails)}
            )
            record = FileRecord.model_validate(updated)
        except Exception as error:
            handle_error(error, "Failed to update file users")

        await self._refresh(path)
        return record

    async def delete(self, file_id: str, blob_id: str, path: str) -> DeleteResult:
        try:
            await self._documents.delete_document(*self._collection, file_id)
            # Record is gone from here on, even if the blob delete fails
            await self._blobs.delete_file(self._settings.bucket_id, blob_id)

            logger.info("Deleted file %s (blob %s)", file_id, blob_id)
        except Exception as error:
            handle_error(error, "Failed to delete file")

        await self._refresh(path)
        return DeleteResult()
