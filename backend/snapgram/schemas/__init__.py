"""Schema exports."""

from snapgram.schemas.auth import (
    FacebookSigninRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    SigninRequest,
    SignupRequest,
    SignupResult,
)
from snapgram.schemas.envelope import Envelope, ErrorEnvelope
from snapgram.schemas.media import CommentCreate, CommentRead, MediaCreate, MediaRead
from snapgram.schemas.user import (
    FollowRead,
    UserCounts,
    UserPublic,
    UserRead,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "CommentCreate",
    "CommentRead",
    "Envelope",
    "ErrorEnvelope",
    "FacebookSigninRequest",
    "FollowRead",
    "MediaCreate",
    "MediaRead",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "SigninRequest",
    "SignupRequest",
    "SignupResult",
    "UserCounts",
    "UserPublic",
    "UserRead",
    "UserSummary",
    "UserUpdate",
]
