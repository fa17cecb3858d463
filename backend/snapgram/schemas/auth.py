"""Account lifecycle schemas."""
from __future__ import annotations

import uuid
from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field

BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes long")
    return value


Password = Annotated[str, Field(min_length=6), AfterValidator(_fits_bcrypt)]


class SignupRequest(BaseModel):
    """Self-service registration payload."""

    fullname: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password: Password
    website: str | None = None
    biography: str | None = None
    mobile_number: str | None = Field(default=None, max_length=32)


class SignupResult(BaseModel):
    """Identity of the newly registered user."""

    id: uuid.UUID
    message: str


class SigninRequest(BaseModel):
    """Local login payload."""

    username: str
    password: str


class FacebookSigninRequest(BaseModel):
    """Federated login payload: the Facebook user id and its access token."""

    id: str = Field(min_length=1)
    token: str = Field(min_length=1)


class PasswordResetRequest(BaseModel):
    """Request body to initiate a password reset."""

    email: EmailStr


class PasswordResetConfirm(BaseModel):
    """Payload to finalize a password reset."""

    password: Password
