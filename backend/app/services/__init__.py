"""Business logic services — process-scoped singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.config import Settings
    from app.services.file_service import FileService
    from app.services.usage_service import UsageService
    from app.services.user_service import UserResolver
    from app.storage.local_blob import LocalBlobStore

logger = logging.getLogger(__name__)

_file_service: FileService | None = None
_usage_service: UsageService | None = None
_user_resolver: UserResolver | None = None
_local_blobs: LocalBlobStore | None = None


def init_services(settings: Settings, session_factory=None) -> None:
    """Create the stores for the configured backend and wire up the services."""
    global _file_service, _usage_service, _user_resolver, _local_blobs

    from app.services.file_service import FileService
    from app.services.revalidation import PathRevalidator
    from app.services.usage_service import UsageService
    from app.services.user_service import UserResolver
    from app.storage import build_stores
    from app.storage.local_blob import LocalBlobStore

    documents, blobs = build_stores(settings, session_factory)
    _local_blobs = blobs if isinstance(blobs, LocalBlobStore) else None

    account = None
    if not settings.is_local_backend:
        from app.storage.appwrite import AppwriteAccount, AppwriteClient

        account = AppwriteAccount(AppwriteClient.from_settings(settings))

    _file_service = FileService(
        documents,
        blobs,
        settings,
        revalidator=PathRevalidator.from_settings(settings),
    )
    _usage_service = UsageService(documents, settings)
    _user_resolver = UserResolver(documents, settings, account=account)
    logger.info("Services initialized (storage backend: %s)", settings.storage_backend)


def shutdown_services() -> None:
    global _file_service, _usage_service, _user_resolver, _local_blobs
    _file_service = None
    _usage_service = None
    _user_resolver = None
    _local_blobs = None


def get_file_service() -> FileService:
    if _file_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _file_service


def get_usage_service() -> UsageService:
    if _usage_service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _usage_service


def get_user_resolver() -> UserResolver:
    if _user_resolver is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return _user_resolver


def get_local_blob_store() -> LocalBlobStore | None:
    """The local blob store, or None when blobs live in the remote backend."""
    return _local_blobs
