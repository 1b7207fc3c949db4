import logging

from anecdotes.core.logging import setup_logging
from anecdotes.db.session import migration_url, to_sync_url


def test_setup_logging_quiets_noisy_libraries():
    setup_logging("DEBUG")
    assert logging.getLogger("passlib").level == logging.ERROR
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_sync_url_for_migrations():
    assert to_sync_url("sqlite+aiosqlite:///./a.db") == "sqlite:///./a.db"
    assert to_sync_url("postgresql+asyncpg://u:p@h/db") == "postgresql+psycopg2://u:p@h/db"
    assert to_sync_url("sqlite:///./a.db") == "sqlite:///./a.db"


def test_migration_url_priority(monkeypatch):
    monkeypatch.delenv("ALEMBIC_DATABASE_URL", raising=False)
    assert migration_url("sqlite+aiosqlite:///./app.db", "sqlite:///./ini.db") == "sqlite:///./app.db"
    assert migration_url(None, "sqlite:///./ini.db") == "sqlite:///./ini.db"

    monkeypatch.setenv("ALEMBIC_DATABASE_URL", "sqlite:///./override.db")
    assert migration_url("sqlite+aiosqlite:///./app.db", "sqlite:///./ini.db") == "sqlite:///./override.db"
