"""Follow graph operations."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.core.errors import CanNotFollowError, UserNotFoundError
from snapgram.models import Follow, User
from snapgram.services import user_service

logger = logging.getLogger(__name__)


async def _edge_exists(
    session: AsyncSession, follower_id: uuid.UUID, followed_id: uuid.UUID
) -> bool:
    result = await session.execute(
        select(Follow.follower_id).where(
            Follow.follower_id == follower_id, Follow.followed_id == followed_id
        )
    )
    return result.first() is not None


async def follow(
    session: AsyncSession, follower_id: uuid.UUID, followed_id: uuid.UUID
) -> tuple[uuid.UUID, uuid.UUID]:
    """Add the edge follower -> followed; an existing edge is left untouched."""
    if follower_id == followed_id:
        raise CanNotFollowError()
    if await user_service.get_user(session, followed_id) is None:
        raise UserNotFoundError()

    if await _edge_exists(session, follower_id, followed_id):
        return follower_id, followed_id

    session.add(Follow(follower_id=follower_id, followed_id=followed_id))
    try:
        await session.flush()
    except IntegrityError:
        # a concurrent request inserted the same edge first
        await session.rollback()
        return follower_id, followed_id
    await user_service.adjust_counter(session, follower_id, "follows_count", 1)
    await user_service.adjust_counter(session, followed_id, "followed_by_count", 1)
    await session.commit()
    logger.info("User %s now follows %s", follower_id, followed_id)
    return follower_id, followed_id


async def unfollow(
    session: AsyncSession, follower_id: uuid.UUID, followed_id: uuid.UUID
) -> tuple[uuid.UUID, uuid.UUID]:
    """Remove the edge follower -> followed if it exists."""
    result = await session.execute(
        delete(Follow).where(
            Follow.follower_id == follower_id, Follow.followed_id == followed_id
        )
    )
    if result.rowcount:
        await user_service.adjust_counter(session, follower_id, "follows_count", -1)
        await user_service.adjust_counter(
            session, followed_id, "followed_by_count", -1
        )
        logger.info("User %s unfollowed %s", follower_id, followed_id)
    await session.commit()
    return follower_id, followed_id


async def list_follows(session: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """Users followed by ``user_id``, in the order they were followed."""
    result = await session.execute(
        select(User)
        .join(Follow, Follow.followed_id == User.id)
        .where(Follow.follower_id == user_id)
        .order_by(Follow.created_at.asc())
    )
    return list(result.scalars().all())


async def list_followed_by(session: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """Users following ``user_id``, in the order they started following."""
    result = await session.execute(
        select(User)
        .join(Follow, Follow.follower_id == User.id)
        .where(Follow.followed_id == user_id)
        .order_by(Follow.created_at.asc())
    )
    return list(result.scalars().all())
