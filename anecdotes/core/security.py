"""Password hashing and signed session tokens.

Tokens are stateless HS256 JWTs. ``encode_token`` / ``decode_token`` are pure
functions of their arguments so they can be tested without a running app.
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from anecdotes.core.exceptions import ExpiredTokenError, InvalidTokenError

DEFAULT_ROUNDS = 12

# bcrypt hard limit: 72 bytes (UTF-8)
MAX_PASSWORD_BYTES = 72


@lru_cache
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return _crypt_context(rounds).hash("not-a-real-password")


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return _crypt_context(rounds).hash(password)


def verify_password(plain: str, hashed: str, rounds: int = DEFAULT_ROUNDS) -> bool:
    return _crypt_context(rounds).verify(plain, hashed)


def burn_verify(plain: str, rounds: int = DEFAULT_ROUNDS) -> None:
    """Run a throwaway bcrypt verify so a missing account costs as much as a wrong password."""
    _crypt_context(rounds).verify(plain, _dummy_hash(rounds))


def encode_token(
    claims: dict[str, Any],
    secret: str,
    expires_delta: timedelta,
    *,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign ``claims`` with ``iat`` = now and ``exp`` = now + expires_delta."""
    issued_at = now or datetime.now(timezone.utc)
    to_encode = dict(claims)
    to_encode.update({"iat": issued_at, "exp": issued_at + expires_delta})
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, *, algorithm: str = "HS256") -> dict[str, Any]:
    """Return the verified claims or raise ExpiredTokenError / InvalidTokenError."""
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as exc:
        raise ExpiredTokenError() from exc
    except JWTError as exc:
        raise InvalidTokenError() from exc
