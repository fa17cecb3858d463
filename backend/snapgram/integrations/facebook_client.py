"""Facebook Graph API client used to verify federated logins."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from snapgram.core.config import Settings

logger = logging.getLogger(__name__)


class FacebookClientError(RuntimeError):
    """Raised when a Facebook access token cannot be verified."""


@dataclass(slots=True)
class FacebookProfile:
    """Identity returned by the Graph API for a verified token."""

    id: str
    name: str | None = None
    email: str | None = None


class FacebookClient:
    """Verifies a user access token by asking the Graph API who it belongs to."""

    def __init__(
        self,
        *,
        graph_url: str = "https://graph.facebook.com",
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._graph_url = graph_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "FacebookClient":
        return cls(
            graph_url=settings.facebook_graph_url,
            timeout=settings.facebook_timeout_seconds,
        )

    async def verify(self, facebook_id: str, access_token: str) -> FacebookProfile:
        """Return the profile owning ``access_token`` if it matches ``facebook_id``."""
        params = {"fields": "id,name,email", "access_token": access_token}
        try:
            async with httpx.AsyncClient(
                base_url=self._graph_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get("/me", params=params)
        except httpx.HTTPError as exc:
            raise FacebookClientError("Facebook Graph API unreachable") from exc

        if response.status_code != 200:
            logger.info("Facebook token rejected with status %s", response.status_code)
            raise FacebookClientError("Facebook token rejected")

        try:
            payload = response.json()
        except ValueError as exc:
            raise FacebookClientError("Facebook Graph API returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise FacebookClientError("Facebook Graph API returned an unexpected body")
        profile_id = str(payload.get("id") or "")
        if profile_id != facebook_id:
            raise FacebookClientError("Facebook token does not belong to this user")
        return FacebookProfile(
            id=profile_id, name=payload.get("name"), email=payload.get("email")
        )
