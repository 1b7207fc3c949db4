"""Post ownership authorization and the post operations built on it.

Only the owner may read a single post, and only the owner may update or
delete it, and only while ``created_at`` is strictly after ``now - window``.
A post sitting exactly on the boundary is locked. Editing never moves
``created_at``, so the window cannot be extended.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum

from loguru import logger

from anecdotes.core.exceptions import NotFoundError, NotOwnerError, ValidationError, WindowExpiredError
from anecdotes.db.session import MAX_INTEGER, utc_now
from anecdotes.models.post import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, Post
from anecdotes.stores.posts import PostStore

DEFAULT_EDIT_WINDOW = timedelta(minutes=30)


class Decision(str, Enum):
    ALLOW = "allow"
    NOT_OWNER = "not_owner"
    WINDOW_EXPIRED = "window_expired"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostAuthorizer:
    def __init__(self, edit_window: timedelta = DEFAULT_EDIT_WINDOW, clock: Callable[[], datetime] = utc_now) -> None:
        self.edit_window = edit_window
        self.clock = clock

    @property
    def window_minutes(self) -> int:
        return int(self.edit_window.total_seconds() // 60)

    def can_modify(self, post: Post, now: datetime | None = None) -> bool:
        cutoff = _as_utc(now or self.clock()) - self.edit_window
        return _as_utc(post.created_at) > cutoff

    def authorize_read(self, post: Post, caller_id: int) -> Decision:
        if post.user_id != caller_id:
            return Decision.NOT_OWNER
        return Decision.ALLOW

    def authorize_write(self, post: Post, caller_id: int, now: datetime | None = None) -> Decision:
        if post.user_id != caller_id:
            return Decision.NOT_OWNER
        if not self.can_modify(post, now):
            return Decision.WINDOW_EXPIRED
        return Decision.ALLOW

    def require_read(self, post: Post, caller_id: int) -> None:
        if not self.authorize_read(post, caller_id).allowed:
            raise NotOwnerError("Access denied. You can only view your own posts.")

    def require_write(
        self, post: Post, caller_id: int, now: datetime | None = None, *, action: str = "modify"
    ) -> None:
        """``action`` ("update", "delete") names the operation in the NotOwnerError message."""
        decision = self.authorize_write(post, caller_id, now)
        if decision is Decision.NOT_OWNER:
            raise NotOwnerError(f"Access denied. You can only {action} your own posts.")
        if decision is Decision.WINDOW_EXPIRED:
            raise WindowExpiredError(
                f"Post can only be edited within {self.window_minutes} minutes of creation"
            )


def validate_post_input(title: str | None, content: str | None) -> None:
    if not title or not content:
        raise ValidationError("Title and content are required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be between 1 and {TITLE_MAX_LENGTH} characters")
    if len(content) > CONTENT_MAX_LENGTH:
        raise ValidationError(f"Content must be between 1 and {CONTENT_MAX_LENGTH:,} characters")


class PostService:
    def __init__(self, posts: PostStore, authorizer: PostAuthorizer) -> None:
        self.posts = posts
        self.authorizer = authorizer

    async def _get_existing(self, post_id: int) -> Post:
        # No row can carry an id outside the INTEGER range
        if not 0 < post_id <= MAX_INTEGER:
            raise NotFoundError()
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError()
        return post

    async def list_mine(self, owner_id: int, limit: int = 50, offset: int = 0) -> list[Post]:
        return await self.posts.list_by_owner(owner_id, limit, offset)

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[Post]:
        # Not filtered by owner: every caller sees every user's posts
        return await self.posts.list_all(limit, offset)

    async def get(self, post_id: int, caller_id: int) -> Post:
        post = await self._get_existing(post_id)
        self.authorizer.require_read(post, caller_id)
        return post

    async def create(self, owner_id: int, title: str | None, content: str | None) -> Post:
        validate_post_input(title, content)
        post_id = await self.posts.insert(owner_id, title, content)
        logger.info("User id={} created post id={}", owner_id, post_id)
        return await self._get_existing(post_id)

    async def update(self, post_id: int, caller_id: int, title: str | None, content: str | None) -> Post:
        validate_post_input(title, content)
        post = await self._get_existing(post_id)
        self._require_write(post, caller_id, "update")
        await self.posts.update(post_id, title, content)
        return await self._get_existing(post_id)

    async def delete(self, post_id: int, caller_id: int) -> None:
        post = await self._get_existing(post_id)
        self._require_write(post, caller_id, "delete")
        await self.posts.delete(post_id)
        logger.info("User id={} deleted post id={}", caller_id, post_id)

    def _require_write(self, post: Post, caller_id: int, action: str) -> None:
        try:
            self.authorizer.require_write(post, caller_id, action=action)
        except (NotOwnerError, WindowExpiredError) as exc:
            logger.warning("Denied {} of post id={} for user id={}: {}", action, post.id, caller_id, exc.message)
            raise

    def is_editable(self, post: Post) -> bool:
        return self.authorizer.can_modify(post)
