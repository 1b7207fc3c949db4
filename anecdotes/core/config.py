"""Application configuration from environment."""
from datetime import timedelta
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Anecdotes"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./anecdotes.db"

    # Session token (JWT in an HTTP-only cookie)
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    auth_cookie_name: str = "token"
    cookie_secure: bool = False

    # bcrypt cost factor; 12 rounds is roughly 100-250ms per verify
    bcrypt_rounds: int = 12

    # Posts may be edited or deleted this long after creation
    post_edit_window_minutes: int = 30

    cors_origins: list[str] = ["http://localhost:4200"]

    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def access_token_expires(self) -> timedelta:
        return timedelta(minutes=self.access_token_expire_minutes)

    @property
    def post_edit_window(self) -> timedelta:
        return timedelta(minutes=self.post_edit_window_minutes)


@lru_cache
def get_settings() -> Settings:
    return Settings()
