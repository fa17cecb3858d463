"""User model holding credentials, profile data and cached counters."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapgram.db.base import Base
from snapgram.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from snapgram.models.media import Media


class User(TimestampMixin, Base):
    """Account identity used for authentication and the follow graph."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    fullname: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    email: Mapped[str | None] = mapped_column(String(320), unique=True, index=True)
    hashed_password: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(2048))
    biography: Mapped[str | None] = mapped_column(Text())
    mobile_number: Mapped[str | None] = mapped_column(String(32))
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    facebook_id: Mapped[str | None] = mapped_column(String(64), unique=True)

    # digests of one-time tokens, never the raw value
    confirmation_token: Mapped[str | None] = mapped_column(
        String(64), unique=True, index=True
    )
    confirmation_token_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
    reset_password_token: Mapped[str | None] = mapped_column(
        String(64), unique=True, index=True
    )
    reset_password_token_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )

    media_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    follows_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    followed_by_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    media: Mapped[list["Media"]] = relationship(
        "Media", back_populates="owner", passive_deletes=True
    )
