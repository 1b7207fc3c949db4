"""Async engine / session factory and the declarative base."""
import os
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


# Largest value an INTEGER column holds (SQLite and PostgreSQL BIGINT)
MAX_INTEGER = 2**63 - 1


class Base(DeclarativeBase):
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_sync_url(url: str) -> str:
    """Swap an async driver for its sync counterpart (for Alembic)."""
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg2://", 1)
    if url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    return url


def migration_url(database_url: str | None, fallback: str | None = None) -> str | None:
    """Priority: ALEMBIC_DATABASE_URL -> app database_url (made sync) -> fallback."""
    url = os.getenv("ALEMBIC_DATABASE_URL")
    if url:
        return url
    if database_url:
        return to_sync_url(database_url)
    return fallback


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """One session per request, from the factory the app was built with."""
    async with request.app.state.sessionmaker() as session:
        yield session
