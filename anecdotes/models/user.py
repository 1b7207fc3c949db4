"""User model: unique username, optional email, bcrypt hash only."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from anecdotes.db.session import Base, utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)  # case-sensitive
    email = Column(String(255), nullable=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False)

    posts = relationship("Post", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
