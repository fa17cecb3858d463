"""Media posting, geo search and comments."""

from __future__ import annotations

from fastapi import APIRouter, Query
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.api.deps import CurrentUser, SessionDep, SettingsDep, parse_uuid
from snapgram.core.codes import ResponseCode
from snapgram.core.errors import MediaNotFoundError
from snapgram.models.media import Media
from snapgram.schemas.envelope import Envelope
from snapgram.schemas.media import CommentCreate, CommentRead, MediaCreate, MediaRead
from snapgram.services import media_service

router = APIRouter()


async def _load_media(session: AsyncSession, media_id: str) -> Media:
    parsed = parse_uuid(media_id)
    if parsed is None:
        raise MediaNotFoundError()
    return await media_service.get_media(session, parsed)


@router.get("", response_model=Envelope[list[MediaRead]], summary="Search media")
async def search_media(
    session: SessionDep,
    settings: SettingsDep,
    current_user: CurrentUser,
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
) -> Envelope[list[MediaRead]]:
    items = await media_service.search_media(
        session,
        latitude,
        longitude,
        min_distance=settings.media_search_min_distance,
        max_distance=settings.media_search_max_distance,
    )
    return Envelope[list[MediaRead]].success(
        ResponseCode.MEDIA_LIST, [MediaRead.model_validate(item) for item in items]
    )


@router.post("", response_model=Envelope[MediaRead], summary="Post media")
async def create_media(
    payload: MediaCreate, session: SessionDep, current_user: CurrentUser
) -> Envelope[MediaRead]:
    media = await media_service.create_media(session, current_user, payload)
    return Envelope[MediaRead].success(
        ResponseCode.CREATE_MEDIA_SUCCESS, MediaRead.model_validate(media)
    )


@router.get("/{media_id}", response_model=Envelope[MediaRead], summary="Get media")
async def read_media(
    media_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[MediaRead]:
    media = await _load_media(session, media_id)
    return Envelope[MediaRead].success(
        ResponseCode.MEDIA_FOUND, MediaRead.model_validate(media)
    )


@router.delete(
    "/{media_id}", response_model=Envelope[MediaRead], summary="Remove media"
)
async def delete_media(
    media_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[MediaRead]:
    media = await _load_media(session, media_id)
    snapshot = MediaRead.model_validate(media)
    await media_service.remove_media(session, media, actor=current_user)
    return Envelope[MediaRead].success(ResponseCode.MEDIA_DELETED, snapshot)


@router.get(
    "/{media_id}/comments",
    response_model=Envelope[list[CommentRead]],
    summary="List comments",
)
async def list_comments(
    media_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[list[CommentRead]]:
    media = await _load_media(session, media_id)
    comments = await media_service.list_comments(session, media)
    return Envelope[list[CommentRead]].success(
        ResponseCode.COMMENT_LIST,
        [CommentRead.model_validate(comment) for comment in comments],
    )


@router.post(
    "/{media_id}/comments",
    response_model=Envelope[CommentRead],
    summary="Comment on media",
)
async def add_comment(
    media_id: str,
    payload: CommentCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> Envelope[CommentRead]:
    media = await _load_media(session, media_id)
    comment = await media_service.add_comment(
        session, media, author=current_user, payload=payload
    )
    return Envelope[CommentRead].success(
        ResponseCode.CREATE_COMMENT_SUCCESS, CommentRead.model_validate(comment)
    )
