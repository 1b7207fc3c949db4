"""Pydantic schemas for posts."""
from datetime import datetime

from pydantic import BaseModel


class PostInSchema(BaseModel):
    title: str | None = None
    content: str | None = None


class PostOutSchema(BaseModel):
    id: int
    user_id: int
    username: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    editable: bool = False  # same rule the server enforces on update/delete

    class Config:
        from_attributes = True


class PostListSchema(BaseModel):
    posts: list[PostOutSchema]
    user: str
    count: int


class PostWriteOutSchema(BaseModel):
    message: str
    post: PostOutSchema


class StatsOutSchema(BaseModel):
    users: int
    posts: int
