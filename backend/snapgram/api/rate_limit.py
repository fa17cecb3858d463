"""Redis-backed request throttling for sensitive endpoints."""

from __future__ import annotations

from fastapi import Depends, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse ``"10/minute"`` into ``(10, 60)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except (AttributeError, ValueError):
        return fallback
    seconds = _SECONDS.get(window_str.strip().lower(), fallback[1])
    return count, seconds


def rate_limit(setting_name: str, *, fallback: tuple[int, int]):
    """Dependency applying the limit named by a settings attribute.

    Skipped entirely when the limiter was not initialised (no Redis).
    """

    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        value = getattr(request.app.state.settings, setting_name)
        times, seconds = parse_rate(value, fallback=fallback)
        limiter = RateLimiter(times=times, seconds=seconds)
        await limiter(request, response)

    return Depends(_dependency)


LOGIN_RATE_LIMIT = rate_limit("rate_limit_login", fallback=(10, 60))
DEFAULT_RATE_LIMIT = rate_limit("rate_limit_default", fallback=(100, 60))
