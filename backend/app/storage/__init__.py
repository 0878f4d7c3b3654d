"""Storage collaborators — document store and blob store contracts.

Two interchangeable backends implement these protocols:

- ``local``: ``SqlDocumentStore`` (SQLite via SQLAlchemy) + ``LocalBlobStore``
- ``appwrite``: ``AppwriteDatabases`` + ``AppwriteStorage`` over the REST API
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from app.storage.query import Query

if TYPE_CHECKING:
    from app.config import Settings

Document = dict[str, Any]


@dataclass
class DocumentList:
    total: int
    documents: list[Document] = field(default_factory=list)


@dataclass(frozen=True)
class BlobFile:
    """A stored object as reported by the blob store."""
    id: str
    name: str
    size: int
    mime_type: str | None = None


@runtime_checkable
class DocumentStore(Protocol):
    """Collection-addressed document database."""

    async def create_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document: ...

    async def list_documents(
        self, database_id: str, collection_id: str, queries: list[Query] | None = None
    ) -> DocumentList: ...

    async def update_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document: ...

    async def delete_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> None: ...


@runtime_checkable
class BlobStore(Protocol):
    """Bucket-addressed object storage."""

    async def create_file(
        self, bucket_id: str, file_id: str, data: bytes, filename: str
    ) -> BlobFile: ...

    async def delete_file(self, bucket_id: str, file_id: str) -> None: ...


def new_id() -> str:
    """Unique 20-character identifier for documents and blobs."""
    return uuid.uuid4().hex[:20]


def build_stores(settings: Settings, session_factory=None) -> tuple[DocumentStore, BlobStore]:
    """Create the document and blob store for the configured backend."""
    if settings.is_local_backend:
        from app.storage.local_blob import LocalBlobStore
        from app.storage.sql_store import SqlDocumentStore, default_collections

        if session_factory is None:
            from app.database import create_engine, create_session_factory

            session_factory = create_session_factory(create_engine(settings))
        documents = SqlDocumentStore(session_factory, default_collections(settings))
        return documents, LocalBlobStore(settings.blob_dir)

    from app.storage.appwrite import AppwriteClient, AppwriteDatabases, AppwriteStorage

    client = AppwriteClient.from_settings(settings)
    return AppwriteDatabases(client), AppwriteStorage(client)
