"""ORM models package export."""

from snapgram.models.follow import Follow
from snapgram.models.media import Comment, Media, MediaType
from snapgram.models.user import User

__all__ = [
    "Comment",
    "Follow",
    "Media",
    "MediaType",
    "User",
]
