"""Tests for media catalog services."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from snapgram.core.errors import AccessDeniedError
from snapgram.models import Comment, User
from snapgram.schemas.media import CommentCreate, MediaCreate
from snapgram.services import media_service, user_service


def test_haversine_distance_matches_known_values() -> None:
    assert media_service.haversine_distance(0, 0, 0, 0) == 0
    one_degree = media_service.haversine_distance(0, 0, 1, 0)
    assert one_degree == pytest.approx(111_195, rel=1e-3)
    # Paris to London
    assert media_service.haversine_distance(
        48.8566, 2.3522, 51.5074, -0.1278
    ) == pytest.approx(343_500, rel=1e-2)


async def _owner(db_session, create_user, username: str = "owner") -> User:
    created = await create_user(username)
    user = await user_service.get_user(db_session, created.id)
    assert user is not None
    return user


@pytest.mark.asyncio
async def test_search_uses_annulus_and_newest_first(db_session, create_user) -> None:
    owner = await _owner(db_session, create_user)
    inside_old = await media_service.create_media(
        db_session, owner, MediaCreate(link="a", latitude=45.02, longitude=7.0)
    )
    await media_service.create_media(
        db_session, owner, MediaCreate(link="b", latitude=45.0005, longitude=7.0)
    )
    await media_service.create_media(
        db_session, owner, MediaCreate(link="c", latitude=45.2, longitude=7.0)
    )
    inside_new = await media_service.create_media(
        db_session, owner, MediaCreate(link="d", latitude=45.0, longitude=7.03)
    )

    found = await media_service.search_media(
        db_session, 45.0, 7.0, min_distance=1000, max_distance=5000
    )
    assert [media.id for media in found] == [inside_new.id, inside_old.id]


@pytest.mark.asyncio
async def test_search_near_antimeridian(db_session, create_user) -> None:
    owner = await _owner(db_session, create_user)
    across = await media_service.create_media(
        db_session, owner, MediaCreate(link="x", latitude=0.0, longitude=-179.98)
    )

    found = await media_service.search_media(
        db_session, 0.0, 179.99, min_distance=1000, max_distance=5000
    )
    assert [media.id for media in found] == [across.id]


@pytest.mark.asyncio
async def test_remove_media_cascades_comments_and_counter(
    db_session, create_user
) -> None:
    owner = await _owner(db_session, create_user)
    other = await _owner(db_session, create_user, "other")
    media = await media_service.create_media(
        db_session, owner, MediaCreate(link="https://cdn.example.com/p.jpg")
    )
    await media_service.add_comment(
        db_session, media, author=other, payload=CommentCreate(text="hello")
    )

    with pytest.raises(AccessDeniedError):
        await media_service.remove_media(db_session, media, actor=other)

    await media_service.remove_media(db_session, media, actor=owner)
    comments = await db_session.execute(select(func.count()).select_from(Comment))
    assert comments.scalar_one() == 0
    count = await db_session.execute(
        select(User.media_count).where(User.id == owner.id)
    )
    assert count.scalar_one() == 0
