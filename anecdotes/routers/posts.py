"""Post routes: JSON CRUD over the caller's posts."""
from fastapi import APIRouter, status
from loguru import logger

from anecdotes.db.session import MAX_INTEGER
from anecdotes.dependencies import CurrentUser, Posts
from anecdotes.models.post import Post
from anecdotes.schemas.post import PostInSchema, PostListSchema, PostOutSchema, PostWriteOutSchema
from anecdotes.services.posts import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])

DEFAULT_LIMIT = 50


def _parse(value: str | None, default: int, minimum: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    if parsed < minimum or parsed > MAX_INTEGER:
        return default
    return parsed


def _page(limit: str | None, offset: str | None) -> tuple[int, int]:
    """Unparsable or out-of-range paging falls back to limit=50, offset=0."""
    return _parse(limit, DEFAULT_LIMIT, 1), _parse(offset, 0, 0)


def _out(post: Post, service: PostService) -> PostOutSchema:
    return PostOutSchema.model_validate(post).model_copy(update={"editable": service.is_editable(post)})


@router.get("", response_model=PostListSchema)
async def list_my_posts(
    current_user: CurrentUser,
    posts: Posts,
    limit: str | None = None,
    offset: str | None = None,
):
    """Posts owned by the logged-in user, newest first."""
    lim, off = _page(limit, offset)
    rows = await posts.list_mine(current_user.id, lim, off)
    return PostListSchema(posts=[_out(p, posts) for p in rows], user=current_user.username, count=len(rows))


@router.get("/all", response_model=PostListSchema)
async def list_all_posts(
    current_user: CurrentUser,
    posts: Posts,
    limit: str | None = None,
    offset: str | None = None,
):
    """Every user's posts, newest first. Not filtered by ownership."""
    lim, off = _page(limit, offset)
    rows = await posts.list_all(lim, off)
    logger.info("User id={} listed all posts ({} rows)", current_user.id, len(rows))
    return PostListSchema(posts=[_out(p, posts) for p in rows], user=current_user.username, count=len(rows))


@router.get("/{post_id}", response_model=PostOutSchema)
async def get_post(post_id: int, current_user: CurrentUser, posts: Posts):
    post = await posts.get(post_id, current_user.id)
    return _out(post, posts)


@router.post("", response_model=PostWriteOutSchema, status_code=status.HTTP_201_CREATED)
async def create_post(body: PostInSchema, current_user: CurrentUser, posts: Posts):
    post = await posts.create(current_user.id, body.title, body.content)
    return PostWriteOutSchema(message="Post created successfully", post=_out(post, posts))


@router.put("/{post_id}", response_model=PostWriteOutSchema)
async def update_post(post_id: int, body: PostInSchema, current_user: CurrentUser, posts: Posts):
    """Owner only, within the edit window."""
    post = await posts.update(post_id, current_user.id, body.title, body.content)
    return PostWriteOutSchema(message="Post updated successfully", post=_out(post, posts))


@router.delete("/{post_id}")
async def delete_post(post_id: int, current_user: CurrentUser, posts: Posts):
    """Owner only, within the edit window."""
    await posts.delete(post_id, current_user.id)
    return {"message": "Post deleted successfully"}
