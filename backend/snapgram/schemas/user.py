"""User-related schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from snapgram.models.user import User
from snapgram.schemas.auth import Password


class UserCounts(BaseModel):
    """Cached relationship and media counters."""

    media: int = 0
    follows: int = 0
    followed_by: int = 0


class UserSummary(BaseModel):
    """Minimal identity embedded in media and relationship listings."""

    id: uuid.UUID
    username: str
    fullname: str

    model_config = ConfigDict(from_attributes=True)


class UserPublic(UserSummary):
    """Profile visible to any authenticated user."""

    website: str | None = None
    biography: str | None = None
    counts: UserCounts

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            username=user.username,
            fullname=user.fullname,
            website=user.website,
            biography=user.biography,
            counts=_counts(user),
        )


class UserRead(UserPublic):
    """Full profile returned to its owner."""

    email: str | None = None
    mobile_number: str | None = None
    is_active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            username=user.username,
            fullname=user.fullname,
            website=user.website,
            biography=user.biography,
            counts=_counts(user),
            email=user.email,
            mobile_number=user.mobile_number,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class UserUpdate(BaseModel):
    """Mutable profile fields."""

    fullname: str | None = Field(default=None, min_length=1, max_length=255)
    username: str | None = Field(default=None, min_length=1, max_length=64)
    email: EmailStr | None = None
    password: Password | None = None
    website: str | None = None
    biography: str | None = None
    mobile_number: str | None = Field(default=None, max_length=32)


class FollowRead(BaseModel):
    """A follow edge as returned by follow/unfollow."""

    follower: uuid.UUID
    followed: uuid.UUID


def _counts(user: User) -> UserCounts:
    return UserCounts(
        media=user.media_count or 0,
        follows=user.follows_count or 0,
        followed_by=user.followed_by_count or 0,
    )
