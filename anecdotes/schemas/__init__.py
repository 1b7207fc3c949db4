from anecdotes.schemas.auth import (
    LoginOutSchema,
    LoginSchema,
    MeOutSchema,
    SignupOutSchema,
    SignupSchema,
    UserOutSchema,
    UserSummarySchema,
)
from anecdotes.schemas.post import (
    PostInSchema,
    PostListSchema,
    PostOutSchema,
    PostWriteOutSchema,
    StatsOutSchema,
)

__all__ = [
    "LoginOutSchema",
    "LoginSchema",
    "MeOutSchema",
    "PostInSchema",
    "PostListSchema",
    "PostOutSchema",
    "PostWriteOutSchema",
    "SignupOutSchema",
    "SignupSchema",
    "StatsOutSchema",
    "UserOutSchema",
    "UserSummarySchema",
]
