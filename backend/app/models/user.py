"""User model — profile documents keyed by the auth account."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, DocumentMixin


class StoredUser(DocumentMixin, Base):
    __tablename__ = "users"

    full_name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    avatar: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    account_id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)

    def __repr__(self) -> str:
        return f"<StoredUser(id={self.id}, email='{self.email}')>"
