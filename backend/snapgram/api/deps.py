"""Common API dependencies."""

from __future__ import annotations

import uuid
from typing import Annotated
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.core.config import Settings
from snapgram.core.errors import InvalidTokenError
from snapgram.core.security import TokenService
from snapgram.db.session import session_scope
from snapgram.integrations.facebook_client import FacebookClient
from snapgram.models.user import User
from snapgram.services import user_service
from snapgram.services.notification_service import Mailer

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_facebook_client(request: Request) -> FacebookClient:
    return request.app.state.facebook_client


async def get_db_session(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in session_scope(settings.database_url):
        yield session


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> User:
    """Authenticate request via bearer token."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenError()

    subject = tokens.verify(credentials.credentials)
    try:
        user_id = uuid.UUID(subject)
    except (ValueError, TypeError) as exc:
        raise InvalidTokenError() from exc

    user = await user_service.get_user(session, user_id)
    if user is None:
        raise InvalidTokenError()
    return user


def parse_uuid(value: str) -> uuid.UUID | None:
    """Parse a path identifier, returning None when it is malformed."""
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError):
        return None


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
CurrentUser = Annotated[User, Depends(get_current_user)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
