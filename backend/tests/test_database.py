"""Tests for the local SQLite database and store wiring."""

import pytest
from sqlalchemy import text

from app.database import create_engine, create_session_factory, create_tables
from app.services.file_service import FileService
from app.storage import build_stores

from conftest import seed_user


@pytest.fixture
def file_settings(test_settings, tmp_path):
    return test_settings.model_copy(update={"database_path": str(tmp_path / "db" / "storeit.db")})


@pytest.mark.asyncio
async def test_engine_creates_database_file_and_tables(file_settings, tmp_path):
    engine = create_engine(file_settings)
    try:
        await create_tables(engine)

        async with engine.connect() as conn:
            mode = (await conn.execute(text("PRAGMA journal_mode"))).scalar()
            tables = (await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table'")
            )).scalars().all()
    finally:
        await engine.dispose()

    assert (tmp_path / "db" / "storeit.db").exists()
    assert mode == "wal"
    assert {"files", "users"} <= set(tables)


@pytest.mark.asyncio
async def test_build_stores_uses_configured_collection_ids(file_settings):
    custom = file_settings.model_copy(update={
        "files_collection_id": "my_files",
        "users_collection_id": "my_users",
    })
    engine = create_engine(custom)
    try:
        await create_tables(engine)
        documents, blobs = build_stores(custom, create_session_factory(engine))
        owner = await seed_user(documents, settings=custom)

        service = FileService(documents, blobs, custom)
        record = await service.upload(b"abc", "a.png", owner.id, owner.account_id, "/")
        listed = await service.list_files(owner)
    finally:
        await engine.dispose()

    assert [f.id for f in listed.documents] == [record.id]
