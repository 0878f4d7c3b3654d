"""Local DocumentStore — collections as SQLite tables, queries as SQL."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import JSON, ColumnElement, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import Settings
from app.exceptions import DocumentNotFound, UpstreamFailure
from app.models import StoredFile, StoredUser
from app.models.base import Base, to_snake
from app.storage import Document, DocumentList
from app.storage.query import Query

logger = logging.getLogger(__name__)

# Keys the store maintains itself
_READ_ONLY = {"id", "createdAt", "updatedAt"}


def default_collections(settings: Settings) -> dict[str, type[Base]]:
    """Map the configured collection ids to their tables."""
    return {
        settings.files_collection_id: StoredFile,
        settings.users_collection_id: StoredUser,
    }


class SqlDocumentStore:
    """DocumentStore over a single SQLite database.

    ``database_id`` is accepted for interface compatibility; all collections
    live in the one local database.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        collections: dict[str, type[Base]],
    ):
        self._session_factory = session_factory
        self._collections = collections

    def _model(self, collection_id: str) -> type[Base]:
        try:
            return self._collections[collection_id]
        except KeyError:
            raise DocumentNotFound(f"Collection not found: {collection_id}") from None

    async def create_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document:
        model = self._model(collection_id)
        row = model(id=document_id, **_column_values(model, data))
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Could not create document in {collection_id}: {exc}") from exc
        return row.to_document()

    async def list_documents(
        self, database_id: str, collection_id: str, queries: list[Query] | None = None
    ) -> DocumentList:
        model = self._model(collection_id)
        conditions: list[ColumnElement[bool]] = []
        ordering = []
        limit: int | None = None
        offset: int | None = None

        for query in queries or []:
            if query.is_filter:
                conditions.append(_condition(model, query))
            elif query.method == "orderAsc":
                ordering.append(_column(model, query.attribute).asc())
            elif query.method == "orderDesc":
                ordering.append(_column(model, query.attribute).desc())
            elif query.method == "limit":
                limit = query.values[0]
            elif query.method == "offset":
                offset = query.values[0]
            else:
                raise UpstreamFailure(f"Unsupported query method: {query.method}")

        stmt = select(model).where(*conditions).order_by(*ordering)
        count_stmt = select(func.count()).select_from(model).where(*conditions)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)

        try:
            async with self._session_factory() as session:
                total = (await session.execute(count_stmt)).scalar_one()
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Could not list documents in {collection_id}: {exc}") from exc

        logger.debug("Listed %d/%d documents from %s", len(rows), total, collection_id)
        return DocumentList(total=total, documents=[row.to_document() for row in rows])

    async def update_document(
        self, database_id: str, collection_id: str, document_id: str, data: Document
    ) -> Document:
        model = self._model(collection_id)
        try:
            async with self._session_factory() as session:
                row = await session.get(model, document_id)
                if row is None:
                    raise DocumentNotFound(f"Document not found: {collection_id}/{document_id}")
                for key, value in _column_values(model, data).items():
                    setattr(row, key, value)
                await session.commit()
                await session.refresh(row)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Could not update {collection_id}/{document_id}: {exc}") from exc
        return row.to_document()

    async def delete_document(self, database_id: str, collection_id: str, document_id: str) -> None:
        model = self._model(collection_id)
        try:
            async with self._session_factory() as session:
                row = await session.get(model, document_id)
                if row is None:
                    raise DocumentNotFound(f"Document not found: {collection_id}/{document_id}")
                await session.delete(row)
                await session.commit()
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Could not delete {collection_id}/{document_id}: {exc}") from exc


def _column(model: type[Base], attribute: str | None):
    column = model.__table__.columns.get(to_snake(attribute or ""))
    if column is None:
        raise UpstreamFailure(f"Unknown attribute for {model.__tablename__}: {attribute}")
    return column


def _column_values(model: type[Base], data: Document) -> dict[str, Any]:
    values = {}
    for key, value in data.items():
        if key in _READ_ONLY:
            continue
        values[_column(model, key).key] = value
    return values


def _condition(model: type[Base], query: Query) -> ColumnElement[bool]:
    if query.method == "or":
        return or_(*(_condition(model, q) for q in query.values))

    column = _column(model, query.attribute)
    if query.method == "equal":
        return column.in_(query.values)

    # contains: element membership for array columns, substring for strings
    if isinstance(column.type, JSON):
        elements = func.json_each(column).table_valued("value")
        return select(elements.c.value).where(elements.c.value.in_(query.values)).exists()
    return or_(*(column.contains(value, autoescape=True) for value in query.values))
