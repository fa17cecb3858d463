"""Integration shortcuts."""

from .facebook_client import FacebookClient, FacebookClientError, FacebookProfile

__all__ = [
    "FacebookClient",
    "FacebookClientError",
    "FacebookProfile",
]
