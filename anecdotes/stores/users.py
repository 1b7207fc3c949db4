"""User store: thin async wrapper over the users table."""
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from anecdotes.core.exceptions import ConflictError
from anecdotes.models.user import User


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(self, username: str, password_hash: str, email: str | None = None) -> int:
        """Create a user. The UNIQUE constraint decides races on the same username."""
        user = User(username=username, password_hash=password_hash, email=email)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError() from exc
        return user.id

    async def find_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(User.id)))
        return result.scalar_one()
