"""User data access helpers."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.core.errors import UserAlreadyExistsError
from snapgram.core.security import get_password_hash
from snapgram.models import Comment, Follow, Media, User
from snapgram.schemas.user import UserUpdate

logger = logging.getLogger(__name__)

_COUNTERS = {
    "media_count": User.media_count,
    "follows_count": User.follows_count,
    "followed_by_count": User.followed_by_count,
}


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_facebook_id(
    session: AsyncSession, facebook_id: str
) -> User | None:
    result = await session.execute(select(User).where(User.facebook_id == facebook_id))
    return result.scalar_one_or_none()


async def list_users(
    session: AsyncSession, *, skip: int = 0, limit: int = 50
) -> list[User]:
    """Return paginated users, newest first."""
    result = await session.execute(
        select(User)
        .order_by(User.created_at.desc())
        .offset(skip)
        .limit(min(limit, 100))
    )
    return list(result.scalars().all())


async def adjust_counter(
    session: AsyncSession,
    user_ids: uuid.UUID | list[uuid.UUID],
    counter: str,
    delta: int,
) -> None:
    """Atomically add ``delta`` to a cached counter without committing."""
    ids = user_ids if isinstance(user_ids, list) else [user_ids]
    if not ids:
        return
    column = _COUNTERS[counter]
    await session.execute(
        update(User).where(User.id.in_(ids)).values({counter: column + delta})
    )


async def update_user(session: AsyncSession, user: User, payload: UserUpdate) -> User:
    """Update mutable fields on a user."""
    changes = payload.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    if password is not None:
        user.hashed_password = get_password_hash(password)
    if changes.get("email"):
        changes["email"] = str(changes["email"]).lower()
    for field, value in changes.items():
        if field in {"fullname", "username", "email"} and value is None:
            continue
        setattr(user, field, value)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise UserAlreadyExistsError() from exc
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    """Delete a user together with their media, comments and follow edges."""
    owned_media = select(Media.id).where(Media.user_id == user.id)
    await session.execute(
        delete(Comment).where(
            or_(Comment.user_id == user.id, Comment.media_id.in_(owned_media))
        )
    )
    await session.execute(delete(Media).where(Media.user_id == user.id))

    followed_ids = list(
        (
            await session.execute(
                select(Follow.followed_id).where(Follow.follower_id == user.id)
            )
        ).scalars()
    )
    follower_ids = list(
        (
            await session.execute(
                select(Follow.follower_id).where(Follow.followed_id == user.id)
            )
        ).scalars()
    )
    await adjust_counter(session, followed_ids, "followed_by_count", -1)
    await adjust_counter(session, follower_ids, "follows_count", -1)
    await session.execute(
        delete(Follow).where(
            or_(Follow.follower_id == user.id, Follow.followed_id == user.id)
        )
    )

    await session.delete(user)
    await session.commit()
    logger.info("Deleted user %s", user.id)
