from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from anecdotes.core.config import Settings
from anecdotes.core.exceptions import ConflictError
from anecdotes.db.session import utc_now


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Isolated settings: temp SQLite file and cheap bcrypt rounds."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture()
def app(settings: Settings):
    from anecdotes.main import create_app

    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


# ---------- in-memory fakes for the store interfaces ----------

@dataclass
class FakeUser:
    id: int
    username: str
    password_hash: str
    email: str | None = None
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class FakePost:
    id: int
    user_id: int
    title: str
    content: str
    username: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


class FakeUserStore:
    def __init__(self) -> None:
        self.rows: dict[int, FakeUser] = {}
        self._ids = itertools.count(1)

    async def insert(self, username, password_hash, email=None) -> int:
        if any(u.username == username for u in self.rows.values()):
            raise ConflictError()
        user_id = next(self._ids)
        self.rows[user_id] = FakeUser(user_id, username, password_hash, email)
        return user_id

    async def find_by_username(self, username):
        return next((u for u in self.rows.values() if u.username == username), None)

    async def find_by_id(self, user_id):
        return self.rows.get(user_id)

    async def count(self) -> int:
        return len(self.rows)

    def remove(self, user_id: int) -> None:
        del self.rows[user_id]


class FakePostStore:
    def __init__(self, users: FakeUserStore) -> None:
        self.users = users
        self.rows: dict[int, FakePost] = {}
        self._ids = itertools.count(1)

    async def insert(self, owner_id, title, content) -> int:
        post_id = next(self._ids)
        self.rows[post_id] = FakePost(post_id, owner_id, title, content, username=self.users.rows[owner_id].username)
        return post_id

    async def find_by_id(self, post_id):
        return self.rows.get(post_id)

    async def list_by_owner(self, owner_id, limit=50, offset=0):
        rows = [p for p in self.rows.values() if p.user_id == owner_id]
        return sorted(rows, key=lambda p: (p.created_at, p.id), reverse=True)[offset:offset + limit]

    async def list_all(self, limit=50, offset=0):
        rows = sorted(self.rows.values(), key=lambda p: (p.created_at, p.id), reverse=True)
        return rows[offset:offset + limit]

    async def update(self, post_id, title, content) -> None:
        post = self.rows[post_id]
        post.title, post.content, post.updated_at = title, content, utc_now()

    async def delete(self, post_id) -> None:
        del self.rows[post_id]

    async def count(self) -> int:
        return len(self.rows)


@pytest.fixture()
def user_store() -> FakeUserStore:
    return FakeUserStore()


@pytest.fixture()
def post_store(user_store: FakeUserStore) -> FakePostStore:
    return FakePostStore(user_store)
