"""Test fixtures — in-memory SQLite stores, temp blob dir and FastAPI test client."""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.main import create_app
from app.models.base import Base
from app.schemas.auth import CurrentUser
from app.services import init_services, shutdown_services
from app.services.file_service import FileService
from app.storage.local_blob import LocalBlobStore
from app.storage.sql_store import SqlDocumentStore, default_collections


@pytest.fixture
def test_settings(tmp_path):
    """Local-backend settings with blobs under a temp dir and no revalidate hook."""
    return settings.model_copy(update={
        "storage_backend": "local",
        "blob_dir": str(tmp_path / "blobs"),
        "revalidate_url": "",
        "usage_page_size": 2,
    })


@pytest_asyncio.fixture
async def session_factory():
    """Async in-memory SQLite shared by every session of one test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def document_store(session_factory, test_settings):
    return SqlDocumentStore(session_factory, default_collections(test_settings))


@pytest.fixture
def blob_store(test_settings):
    return LocalBlobStore(test_settings.blob_dir)


@pytest.fixture
def file_service(document_store, blob_store, test_settings):
    return FileService(document_store, blob_store, test_settings)


async def seed_user(
    store, email: str = "alice@example.com", full_name: str = "Alice", settings=settings
) -> CurrentUser:
    """Insert a user document and return it as the current user."""
    doc = await store.create_document(
        settings.database_id,
        settings.users_collection_id,
        uuid.uuid4().hex[:20],
        {"fullName": full_name, "email": email, "avatar": "", "accountId": uuid.uuid4().hex[:20]},
    )
    return CurrentUser.model_validate(doc)


def make_token(account_id: str, secret: str = settings.secret_key) -> str:
    return jwt.encode({"sub": account_id}, secret, algorithm=settings.token_algorithm)


@pytest_asyncio.fixture
async def alice(document_store):
    return await seed_user(document_store)


@pytest_asyncio.fixture
async def client(test_settings, session_factory):
    """Async test client with services bound to the in-memory stores."""
    init_services(test_settings, session_factory)
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    shutdown_services()


@pytest.fixture
def user_factory(document_store):
    async def _create(email: str, full_name: str = "Test User") -> CurrentUser:
        return await seed_user(document_store, email, full_name)
    return _create


@pytest.fixture
def auth_headers(alice):
    return {"Authorization": f"Bearer {make_token(alice.account_id)}"}
