"""Post model: owned by exactly one user, removed with its owner."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from anecdotes.db.session import Base, utc_now

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10_000


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    # The edit window is measured from created_at; updated_at never extends it
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)

    owner = relationship("User", back_populates="posts")

    @property
    def username(self) -> str:
        return self.owner.username
