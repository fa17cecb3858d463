"""Database session and engine helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from snapgram.db.base import Base

_engine_cache: dict[str, AsyncEngine] = {}
_sessionmaker_cache: dict[str, async_sessionmaker[AsyncSession]] = {}


def get_engine(database_url: str) -> AsyncEngine:
    """Return (and cache) the async engine for a database URL."""
    engine = _engine_cache.get(database_url)
    if engine is None:
        engine = create_async_engine(database_url, echo=False, future=True)
        _engine_cache[database_url] = engine
    return engine


def get_sessionmaker(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Return (and cache) an async sessionmaker for the given database URL."""
    sessionmaker = _sessionmaker_cache.get(database_url)
    if sessionmaker is None:
        sessionmaker = async_sessionmaker(
            get_engine(database_url), expire_on_commit=False, class_=AsyncSession
        )
        _sessionmaker_cache[database_url] = sessionmaker
    return sessionmaker


async def session_scope(database_url: str) -> AsyncIterator[AsyncSession]:
    """Yield one session bound to the engine for ``database_url``."""
    session_factory = get_sessionmaker(database_url)
    async with session_factory() as session:
        yield session


async def create_schema(database_url: str) -> None:
    """Create all tables that do not exist yet."""
    import snapgram.models  # noqa: F401  registers mappers on Base.metadata

    async with get_engine(database_url).begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


async def dispose_engine(database_url: str) -> None:
    """Dispose the cached engine/sessionmaker for the given database URL."""
    engine = _engine_cache.pop(database_url, None)
    if engine is not None:
        await engine.dispose()
    _sessionmaker_cache.pop(database_url, None)
