"""Post store: thin async wrapper over the posts table.

Every read eager-loads the owner so ``Post.username`` is safe to touch
outside the session's greenlet.
"""
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from anecdotes.db.session import utc_now
from anecdotes.models.post import Post


def _with_owner(stmt):
    return stmt.options(joinedload(Post.owner)).execution_options(populate_existing=True)


class PostStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(self, owner_id: int, title: str, content: str) -> int:
        post = Post(user_id=owner_id, title=title, content=content)
        self.session.add(post)
        await self.session.commit()
        return post.id

    async def find_by_id(self, post_id: int) -> Post | None:
        result = await self.session.execute(_with_owner(select(Post).where(Post.id == post_id)))
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: int, limit: int = 50, offset: int = 0) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.user_id == owner_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(_with_owner(stmt))
        return list(result.scalars().all())

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[Post]:
        stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).offset(offset)
        result = await self.session.execute(_with_owner(stmt))
        return list(result.scalars().all())

    async def update(self, post_id: int, title: str, content: str) -> None:
        await self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(title=title, content=content, updated_at=utc_now())
        )
        await self.session.commit()

    async def delete(self, post_id: int) -> None:
        await self.session.execute(delete(Post).where(Post.id == post_id))
        await self.session.commit()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Post.id)))
        return result.scalar_one()
