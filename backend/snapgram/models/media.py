"""Media posts and their comments."""

from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapgram.db.base import Base
from snapgram.models.mixins import CreatedAtMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from snapgram.models.user import User


class MediaType(str, enum.Enum):
    """Kinds of media a user can post."""

    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class Media(CreatedAtMixin, Base):
    """An image or video posted by a user at a location."""

    __tablename__ = "media"
    __table_args__ = (
        Index("ix_media_location", "latitude", "longitude"),
        Index("ix_media_user_id", "user_id"),
        Index("ix_media_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    type: Mapped[MediaType] = mapped_column(
        Enum(MediaType, name="mediatype"), default=MediaType.IMAGE, nullable=False
    )
    caption: Mapped[str | None] = mapped_column(Text())
    link: Mapped[str] = mapped_column(String(2048), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="media")
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="media",
        order_by="Comment.created_at",
        passive_deletes=True,
    )


class Comment(CreatedAtMixin, Base):
    """Text comment left by a user on a media item."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_media_id", "media_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    media_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("media.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text(), nullable=False)

    media: Mapped["Media"] = relationship("Media", back_populates="comments")
    author: Mapped["User"] = relationship("User")
