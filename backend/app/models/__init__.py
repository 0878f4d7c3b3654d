"""SQLAlchemy ORM models for the local storage backend."""

from app.models.base import Base
from app.models.stored_file import StoredFile
from app.models.user import StoredUser

__all__ = [
    "Base",
    "StoredFile",
    "StoredUser",
]
