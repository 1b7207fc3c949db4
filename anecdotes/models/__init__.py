from anecdotes.models.user import User
from anecdotes.models.post import Post

__all__ = ["User", "Post"]
