"""Credential & session management: signup, login, token verification, logout.

Sessions are stateless: a signed JWT in an HTTP-only cookie. Nothing is stored
server-side, so logout only tells the transport layer to drop the cookie and a
leaked token stays valid until its ``exp``.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi.concurrency import run_in_threadpool
from loguru import logger

from anecdotes.core.config import Settings
from anecdotes.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
    ValidationError,
)
from anecdotes.core.security import (
    MAX_PASSWORD_BYTES,
    burn_verify,
    decode_token,
    encode_token,
    hash_password,
    verify_password,
)
from anecdotes.db.session import MAX_INTEGER
from anecdotes.stores.users import UserStore

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class UserSummary:
    id: int
    username: str


@dataclass(frozen=True)
class UserIdentity:
    id: int
    username: str
    email: str | None = None


@dataclass(frozen=True)
class RevokeInstruction:
    """Tells the transport layer which cookie to strip."""

    cookie_name: str
    path: str
    httponly: bool
    samesite: str
    secure: bool


class CredentialManager:
    def __init__(self, users: UserStore, settings: Settings) -> None:
        self.users = users
        self.settings = settings

    async def register(self, username: str | None, password: str | None, email: str | None = None) -> UserSummary:
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

        if await self.users.find_by_username(username) is not None:
            raise ConflictError()

        password_hash = await run_in_threadpool(hash_password, password, self.settings.bcrypt_rounds)
        # A concurrent signup can still win between the lookup and here;
        # the store turns the UNIQUE violation into ConflictError.
        user_id = await self.users.insert(username, password_hash, email or None)
        logger.info("Registered user id={} username={}", user_id, username)
        return UserSummary(id=user_id, username=username)

    async def authenticate(self, username: str | None, password: str | None) -> tuple[UserIdentity, str]:
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = await self.users.find_by_username(username)
        if user is None:
            await run_in_threadpool(burn_verify, password, self.settings.bcrypt_rounds)
            logger.warning("Failed login for username={}", username)
            raise InvalidCredentialsError()
        if not await run_in_threadpool(verify_password, password, user.password_hash, self.settings.bcrypt_rounds):
            logger.warning("Failed login for username={}", username)
            raise InvalidCredentialsError()

        token = encode_token(
            {"sub": str(user.id), "username": user.username},
            self.settings.secret_key,
            self.settings.access_token_expires,
            algorithm=self.settings.algorithm,
        )
        logger.info("User id={} logged in", user.id)
        return UserIdentity(id=user.id, username=user.username, email=user.email), token

    async def verify(self, token: str | None) -> UserIdentity:
        if not token:
            raise MissingTokenError()

        claims = decode_token(token, self.settings.secret_key, algorithm=self.settings.algorithm)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
        if not 0 < user_id <= MAX_INTEGER:
            raise InvalidTokenError()

        # The account may have been removed after the token was issued
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return UserIdentity(id=user.id, username=user.username, email=user.email)

    def revoke(self) -> RevokeInstruction:
        # Browsers only drop a cookie whose path and attributes match the one set
        cookie = self.cookie_settings()
        return RevokeInstruction(
            cookie_name=cookie["key"],
            path=cookie["path"],
            httponly=cookie["httponly"],
            samesite=cookie["samesite"],
            secure=cookie["secure"],
        )

    def cookie_settings(self) -> dict:
        """Attributes for the session cookie set on login."""
        return {
            "key": self.settings.auth_cookie_name,
            "max_age": self.settings.access_token_expire_minutes * 60,
            "httponly": True,
            "samesite": "strict",
            "secure": self.settings.cookie_secure,
            "path": "/",
        }
