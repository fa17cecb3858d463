"""Media catalog services."""

from __future__ import annotations

import logging
import math
import uuid

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from snapgram.core.errors import AccessDeniedError, MediaNotFoundError
from snapgram.models import Comment, Media, User
from snapgram.schemas.media import CommentCreate, MediaCreate
from snapgram.services import user_service

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6_371_008.8


def haversine_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Great-circle distance in meters between two points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def _bounding_box(
    stmt: Select[tuple[Media]], latitude: float, longitude: float, radius: float
) -> Select[tuple[Media]]:
    lat_delta = math.degrees(radius / EARTH_RADIUS_METERS)
    stmt = stmt.where(
        Media.latitude >= latitude - lat_delta, Media.latitude <= latitude + lat_delta
    )
    cos_lat = math.cos(math.radians(latitude))
    if cos_lat < 1e-6:
        return stmt
    lon_delta = math.degrees(radius / (EARTH_RADIUS_METERS * cos_lat))
    # skip the longitude bound when the box crosses the antimeridian
    if longitude - lon_delta < -180 or longitude + lon_delta > 180:
        return stmt
    return stmt.where(
        Media.longitude >= longitude - lon_delta,
        Media.longitude <= longitude + lon_delta,
    )


async def create_media(
    session: AsyncSession, owner: User, payload: MediaCreate
) -> Media:
    """Persist a media item and bump its owner's media counter."""
    media = Media(user_id=owner.id, **payload.model_dump())
    session.add(media)
    await session.flush()
    await user_service.adjust_counter(session, owner.id, "media_count", 1)
    await session.commit()
    logger.info("Media %s has been saved", media.id)
    return await get_media(session, media.id)


async def get_media(session: AsyncSession, media_id: uuid.UUID) -> Media:
    """Return a media item with its owner loaded."""
    result = await session.execute(
        select(Media)
        .options(selectinload(Media.owner))
        .where(Media.id == media_id)
        .execution_options(populate_existing=True)
    )
    media = result.scalar_one_or_none()
    if media is None:
        raise MediaNotFoundError()
    return media


async def search_media(
    session: AsyncSession,
    latitude: float,
    longitude: float,
    *,
    min_distance: float,
    max_distance: float,
    limit: int = 100,
) -> list[Media]:
    """Media between ``min_distance`` and ``max_distance`` meters away, newest first."""
    stmt = select(Media).options(selectinload(Media.owner))
    stmt = _bounding_box(stmt, latitude, longitude, max_distance)
    stmt = stmt.order_by(Media.created_at.desc())
    result = await session.execute(stmt)
    matches = [
        media
        for media in result.scalars().all()
        if min_distance
        <= haversine_distance(latitude, longitude, media.latitude, media.longitude)
        <= max_distance
    ]
    return matches[:limit]


async def remove_media(session: AsyncSession, media: Media, *, actor: User) -> Media:
    """Delete a media item owned by ``actor`` together with its comments."""
    if media.user_id != actor.id:
        raise AccessDeniedError.for_action("delete media")

    await session.execute(delete(Comment).where(Comment.media_id == media.id))
    await session.delete(media)
    await user_service.adjust_counter(session, media.user_id, "media_count", -1)
    await session.commit()
    logger.info("Media %s has been removed", media.id)
    return media


async def add_comment(
    session: AsyncSession, media: Media, *, author: User, payload: CommentCreate
) -> Comment:
    comment = Comment(media_id=media.id, user_id=author.id, text=payload.text)
    session.add(comment)
    await session.commit()
    result = await session.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.id == comment.id)
    )
    return result.scalar_one()


async def list_comments(session: AsyncSession, media: Media) -> list[Comment]:
    result = await session.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.media_id == media.id)
        .order_by(Comment.created_at.asc())
    )
    return list(result.scalars().all())
