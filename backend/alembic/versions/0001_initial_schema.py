"""Initial schema: users, follows, media, comments.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("fullname", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=320)),
        sa.Column("hashed_password", sa.String(length=255)),
        sa.Column("website", sa.String(length=2048)),
        sa.Column("biography", sa.Text()),
        sa.Column("mobile_number", sa.String(length=32)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("facebook_id", sa.String(length=64), unique=True),
        sa.Column("confirmation_token", sa.String(length=64)),
        sa.Column("confirmation_token_issued_at", sa.DateTime(timezone=True)),
        sa.Column("reset_password_token", sa.String(length=64)),
        sa.Column("reset_password_token_issued_at", sa.DateTime(timezone=True)),
        sa.Column("media_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("follows_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "followed_by_count", sa.Integer(), nullable=False, server_default="0"
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index(
        "ix_users_confirmation_token", "users", ["confirmation_token"], unique=True
    )
    op.create_index(
        "ix_users_reset_password_token",
        "users",
        ["reset_password_token"],
        unique=True,
    )

    op.create_table(
        "follows",
        sa.Column(
            "follower_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "followed_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        _created_at(),
        sa.CheckConstraint(
            "follower_id <> followed_id", name="ck_follows_no_self_loop"
        ),
    )
    op.create_index("ix_follows_followed_id", "follows", ["followed_id"])

    media_type = sa.Enum("IMAGE", "VIDEO", name="mediatype")
    op.create_table(
        "media",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("type", media_type, nullable=False, server_default="IMAGE"),
        sa.Column("caption", sa.Text()),
        sa.Column("link", sa.String(length=2048), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False, server_default="0"),
        sa.Column("longitude", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
    )
    op.create_index("ix_media_location", "media", ["latitude", "longitude"])
    op.create_index("ix_media_user_id", "media", ["user_id"])
    op.create_index("ix_media_created_at", "media", ["created_at"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "media_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("media.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_comments_media_id", "comments", ["media_id"])


def downgrade() -> None:
    op.drop_index("ix_comments_media_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_media_created_at", table_name="media")
    op.drop_index("ix_media_user_id", table_name="media")
    op.drop_index("ix_media_location", table_name="media")
    op.drop_table("media")
    sa.Enum(name="mediatype").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_follows_followed_id", table_name="follows")
    op.drop_table("follows")
    op.drop_index("ix_users_reset_password_token", table_name="users")
    op.drop_index("ix_users_confirmation_token", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
