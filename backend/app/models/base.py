"""Declarative base and document conversion for local collections."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_snake(name: str) -> str:
    """Document key -> column attribute (accountId -> account_id)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_camel(name: str) -> str:
    """Column attribute -> document key (account_id -> accountId)."""
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class Base(DeclarativeBase):
    pass


class DocumentMixin:
    """Columns every document carries: id plus system timestamps."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            # SQLite drops tzinfo; everything is stored as UTC
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            doc[to_camel(column.key)] = value
        return doc
