"""Service layer exports."""
from snapgram.services import (
    account_service,
    follow_service,
    media_service,
    notification_service,
    user_service,
)

__all__ = [
    "account_service",
    "follow_service",
    "media_service",
    "notification_service",
    "user_service",
]
