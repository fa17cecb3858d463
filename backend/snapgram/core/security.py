"""Security utilities for hashing, opaque tokens and JWT handling."""

from __future__ import annotations

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from snapgram.core.config import Settings
from snapgram.core.errors import InvalidTokenError


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check a password against its hash using bcrypt."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except (ValueError, TypeError):  # guard against malformed hashes
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def generate_opaque_token(length: int = 16) -> str:
    """Return a random URL-safe token of exactly ``length`` characters."""
    token = ""
    while len(token) < length:
        token += secrets.token_urlsafe(length)
    return token[:length]


def hash_token(raw: str) -> str:
    """Digest used to persist and look up confirmation/reset tokens."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class TokenService:
    """Issues and verifies signed session tokens carrying a user identity."""

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        expires_minutes: int = 60,
    ) -> None:
        if not secret_key:
            raise ValueError("Token secret key is not configured")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._default_ttl = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.access_token_expire_minutes,
        )

    def issue(
        self, subject: str, expires_delta: timedelta | None = None, **extra: Any
    ) -> str:
        """Create a signed token for ``subject``."""
        expire = datetime.now(UTC) + (expires_delta or self._default_ttl)
        claims: dict[str, Any] = {"sub": subject, "exp": expire}
        claims.update(extra)
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Decode a token, raising ``InvalidTokenError`` on any failure."""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidTokenError() from exc

    def verify(self, token: str) -> str:
        """Return the subject of a valid token."""
        subject = self.decode(token).get("sub")
        if not subject:
            raise InvalidTokenError()
        return str(subject)


__all__ = [
    "TokenService",
    "generate_opaque_token",
    "get_password_hash",
    "hash_token",
    "verify_password",
]
