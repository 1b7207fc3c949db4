"""Site-wide counters."""
from fastapi import APIRouter

from anecdotes.dependencies import DBSession
from anecdotes.schemas.post import StatsOutSchema
from anecdotes.stores.posts import PostStore
from anecdotes.stores.users import UserStore

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsOutSchema)
async def get_stats(db: DBSession):
    return StatsOutSchema(users=await UserStore(db).count(), posts=await PostStore(db).count())
