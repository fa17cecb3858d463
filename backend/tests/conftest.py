"""Test fixtures for the Snapgram backend."""
from __future__ import annotations

import os
import re
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Iterable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from snapgram.core.config import Settings
from snapgram.core.security import TokenService, get_password_hash
from snapgram.db.base import Base
from snapgram.db.session import dispose_engine, get_sessionmaker
from snapgram.integrations.facebook_client import FacebookClientError, FacebookProfile
from snapgram.main import create_app
from snapgram.models import User
from snapgram.services.notification_service import Mailer

_TOKEN_IN_URL = re.compile(r"/accounts/(?:confirm|reset-password)/(\S+)")


class RecordingMailer(Mailer):
    """Mailer that keeps messages in memory instead of talking to SMTP."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.outbox: list[dict[str, object]] = []

    async def send(
        self, *, recipients: Iterable[str], subject: str, body: str
    ) -> bool:
        self.outbox.append(
            {"recipients": list(recipients), "subject": subject, "body": body}
        )
        return True

    def last_token(self) -> str:
        """Extract the one-time token from the most recent message."""
        match = _TOKEN_IN_URL.search(str(self.outbox[-1]["body"]))
        assert match is not None
        return match.group(1)


class FakeFacebookClient:
    """Accepts only the (facebook id, token) pairs registered on it."""

    def __init__(self) -> None:
        self.profiles: dict[tuple[str, str], FacebookProfile] = {}

    def register(
        self,
        facebook_id: str,
        token: str,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> None:
        self.profiles[(facebook_id, token)] = FacebookProfile(
            id=facebook_id, name=name, email=email
        )

    async def verify(self, facebook_id: str, access_token: str) -> FacebookProfile:
        profile = self.profiles.get((facebook_id, access_token))
        if profile is None:
            raise FacebookClientError("Facebook token rejected")
        return profile


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture()
def settings(db_url: str) -> Settings:
    return Settings(
        database_url=db_url,
        secret_key="test-secret-key",
        redis_url=None,
        smtp_host=None,
        public_base_url="http://test",
    )


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def db_session(
    reset_database: None, db_url: str
) -> AsyncIterator[AsyncSession]:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        yield session


@pytest.fixture()
def mailer(settings: Settings) -> RecordingMailer:
    return RecordingMailer(settings)


@pytest_asyncio.fixture()
async def create_user(
    reset_database: None, db_url: str
) -> Callable[..., Awaitable[User]]:
    """Factory inserting users directly, active unless told otherwise."""
    sessionmaker = get_sessionmaker(db_url)

    async def _create(
        username: str,
        *,
        password: str = "secret123",
        email: str | None = None,
        is_active: bool = True,
    ) -> User:
        async with sessionmaker() as session:
            user = User(
                fullname=username.title(),
                username=username,
                email=email or f"{username}@example.com",
                hashed_password=get_password_hash(password),
                is_active=is_active,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _create


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, settings: Settings
) -> AsyncIterator[dict[str, object]]:
    """Yield a fresh app, its HTTP client and the recording collaborators."""
    app = create_app(settings)
    mailer = RecordingMailer(settings)
    facebook = FakeFacebookClient()
    app.state.mailer = mailer
    app.state.facebook_client = facebook
    tokens: TokenService = app.state.token_service

    def auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue(str(user.id))}"}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield {
            "app": app,
            "client": client,
            "mailer": mailer,
            "facebook": facebook,
            "settings": settings,
            "tokens": tokens,
            "auth_headers": auth_headers,
        }
