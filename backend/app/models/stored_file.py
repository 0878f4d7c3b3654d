"""File metadata documents — one row per blob in the local bucket."""

from sqlalchemy import JSON, BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, DocumentMixin


class StoredFile(DocumentMixin, Base):
    __tablename__ = "files"

    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    extension: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    owner: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    account_id: Mapped[str] = mapped_column(String(36), nullable=False)
    users: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    blob_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<StoredFile(id={self.id}, name='{self.name}')>"
