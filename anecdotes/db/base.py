"""SQLAlchemy declarative base and model imports for Alembic."""
from anecdotes.db.session import Base

# Import all models so Alembic can see them
from anecdotes.models.post import Post  # noqa: F401
from anecdotes.models.user import User  # noqa: F401

__all__ = ["Base", "User", "Post"]
