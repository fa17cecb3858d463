"""Directed follow edges between users."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from snapgram.db.base import Base
from snapgram.models.mixins import CreatedAtMixin


class Follow(CreatedAtMixin, Base):
    """Records that ``follower_id`` follows ``followed_id``."""

    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_follows_no_self_loop"),
        Index("ix_follows_followed_id", "followed_id"),
    )

    follower_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    followed_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
