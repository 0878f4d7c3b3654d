"""SQLite database behind the local storage backend."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import Settings
from app.models.base import Base

logger = logging.getLogger(__name__)


def _on_connect(dbapi_conn, _connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def database_url(settings: Settings) -> str:
    return f"sqlite+aiosqlite:///{Path(settings.database_path)}"


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine for ``settings.database_path``; the parent directory is created."""
    Path(settings.database_path).parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(
        database_url(settings),
        echo=settings.debug and settings.log_level == "DEBUG",
        pool_size=settings.max_db_connections,
        max_overflow=0,
    )
    event.listen(engine.sync_engine, "connect", _on_connect)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create the collection tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Collection tables ready at %s", engine.url.database)
