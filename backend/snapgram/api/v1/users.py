"""User profile and follow graph endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.api.deps import CurrentUser, SessionDep, parse_uuid
from snapgram.core.codes import ResponseCode
from snapgram.core.errors import AccessDeniedError, UserNotFoundError
from snapgram.models.user import User
from snapgram.schemas.envelope import Envelope
from snapgram.schemas.user import (
    FollowRead,
    UserPublic,
    UserRead,
    UserSummary,
    UserUpdate,
)
from snapgram.services import follow_service, user_service

router = APIRouter()


def _user_id_or_404(raw_id: str) -> uuid.UUID:
    user_id = parse_uuid(raw_id)
    if user_id is None:
        raise UserNotFoundError()
    return user_id


def _assert_self(current_user: User, user_id: uuid.UUID, action: str) -> None:
    if current_user.id != user_id:
        raise AccessDeniedError.for_action(action)


async def _update(session: AsyncSession, user: User, payload: UserUpdate) -> Envelope[UserRead]:
    updated = await user_service.update_user(session, user, payload)
    return Envelope[UserRead].success(
        ResponseCode.UPDATE_USER_SUCCESS, UserRead.from_user(updated)
    )


async def _delete(session: AsyncSession, user: User) -> Envelope[UserRead]:
    snapshot = UserRead.from_user(user)
    await user_service.delete_user(session, user)
    return Envelope[UserRead].success(ResponseCode.USER_DELETED, snapshot)


@router.get("", response_model=Envelope[list[UserPublic]], summary="List users")
async def list_users(
    session: SessionDep,
    current_user: CurrentUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
) -> Envelope[list[UserPublic]]:
    users = await user_service.list_users(session, skip=skip, limit=limit)
    return Envelope[list[UserPublic]].success(
        ResponseCode.USER_LIST, [UserPublic.from_user(user) for user in users]
    )


@router.get("/self", response_model=Envelope[UserRead], summary="Get own profile")
async def read_self(current_user: CurrentUser) -> Envelope[UserRead]:
    return Envelope[UserRead].success(
        ResponseCode.USER_FOUND, UserRead.from_user(current_user)
    )


@router.put("/self", response_model=Envelope[UserRead], summary="Update own profile")
async def update_self(
    payload: UserUpdate, session: SessionDep, current_user: CurrentUser
) -> Envelope[UserRead]:
    return await _update(session, current_user, payload)


@router.delete(
    "/self", response_model=Envelope[UserRead], summary="Delete own account"
)
async def delete_self(
    session: SessionDep, current_user: CurrentUser
) -> Envelope[UserRead]:
    return await _delete(session, current_user)


@router.get(
    "/self/follows",
    response_model=Envelope[list[UserSummary]],
    summary="Users the caller follows",
)
async def read_follows(
    session: SessionDep, current_user: CurrentUser
) -> Envelope[list[UserSummary]]:
    users = await follow_service.list_follows(session, current_user.id)
    return Envelope[list[UserSummary]].success(
        ResponseCode.USER_FOLLOWS, [UserSummary.model_validate(u) for u in users]
    )


@router.get(
    "/self/followed-by",
    response_model=Envelope[list[UserSummary]],
    summary="Users following the caller",
)
async def read_followed_by(
    session: SessionDep, current_user: CurrentUser
) -> Envelope[list[UserSummary]]:
    users = await follow_service.list_followed_by(session, current_user.id)
    return Envelope[list[UserSummary]].success(
        ResponseCode.USER_FOLLOWED_BY, [UserSummary.model_validate(u) for u in users]
    )


@router.get("/{user_id}", response_model=Envelope[UserPublic], summary="Get user")
async def read_user(
    user_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[UserPublic]:
    user = await user_service.get_user(session, _user_id_or_404(user_id))
    if user is None:
        raise UserNotFoundError()
    return Envelope[UserPublic].success(
        ResponseCode.USER_FOUND, UserPublic.from_user(user)
    )


@router.put("/{user_id}", response_model=Envelope[UserRead], summary="Update user")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> Envelope[UserRead]:
    _assert_self(current_user, _user_id_or_404(user_id), "update user")
    return await _update(session, current_user, payload)


@router.delete(
    "/{user_id}", response_model=Envelope[UserRead], summary="Delete user"
)
async def delete_user(
    user_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[UserRead]:
    _assert_self(current_user, _user_id_or_404(user_id), "delete user")
    return await _delete(session, current_user)


@router.put(
    "/{user_id}/follow", response_model=Envelope[FollowRead], summary="Follow user"
)
async def follow_user(
    user_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[FollowRead]:
    follower, followed = await follow_service.follow(
        session, current_user.id, _user_id_or_404(user_id)
    )
    return Envelope[FollowRead].success(
        ResponseCode.FOLLOWING_THE_USER, FollowRead(follower=follower, followed=followed)
    )


@router.put(
    "/{user_id}/unfollow",
    response_model=Envelope[FollowRead],
    summary="Unfollow user",
)
async def unfollow_user(
    user_id: str, session: SessionDep, current_user: CurrentUser
) -> Envelope[FollowRead]:
    follower, followed = await follow_service.unfollow(
        session, current_user.id, _user_id_or_404(user_id)
    )
    return Envelope[FollowRead].success(
        ResponseCode.UNFOLLOWING_THE_USER,
        FollowRead(follower=follower, followed=followed),
    )
