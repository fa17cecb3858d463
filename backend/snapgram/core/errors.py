"""Business-rule errors rendered into the API error envelope."""

from __future__ import annotations

from fastapi import status

from snapgram.core.codes import ResponseCode
from snapgram.core.i18n import DEFAULT_LOCALE, translate


class APIError(Exception):
    """Base error carrying a response code, message and HTTP status."""

    code: ResponseCode = ResponseCode.BAD_REQUEST
    message: str = "Bad request"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ResponseCode | None = None,
        status_code: int | None = None,
        params: dict[str, object] | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.params = params or {}
        super().__init__(self.render())

    def render(self, locale: str = DEFAULT_LOCALE) -> str:
        """Message text in ``locale`` with its parameters filled in."""
        return translate(self.message, locale, **self.params)

    def to_payload(self, locale: str = DEFAULT_LOCALE) -> dict[str, object]:
        return {
            "code": int(self.code),
            "status": "error",
            "message": self.render(locale),
        }


class LoginFailedError(APIError):
    code = ResponseCode.LOGIN_FAIL
    message = "Username or password invalid."
    status_code = status.HTTP_404_NOT_FOUND


class FacebookLoginFailedError(APIError):
    code = ResponseCode.LOGIN_FAIL_WITH_FACEBOOK
    message = "Facebook authentication failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(APIError):
    code = ResponseCode.INVALID_TOKEN
    message = "Invalid token"
    status_code = status.HTTP_403_FORBIDDEN


class AccountDisabledError(APIError):
    code = ResponseCode.ACCOUNT_DISABLED
    message = "The account is disabled"
    status_code = status.HTTP_403_FORBIDDEN


class UserAlreadyExistsError(APIError):
    code = ResponseCode.USER_ALREADY_EXISTS
    message = "User already exists"


class InvalidConfirmationTokenError(APIError):
    code = ResponseCode.INVALID_CONFIRMATION_TOKEN
    message = "Invalid confirmation token"


class PasswordAlreadyRequestedError(APIError):
    code = ResponseCode.PASSWORD_ALREADY_REQUESTED
    message = (
        "The password for this user has already been requested within {hours} hours."
    )

    def __init__(self, hours: int = 24) -> None:
        super().__init__(params={"hours": hours})


class NoSuchUserError(APIError):
    code = ResponseCode.NO_SUCH_USER_EXIST
    message = "No such user exists"
    status_code = status.HTTP_404_NOT_FOUND


class UserNotFoundError(APIError):
    code = ResponseCode.USER_NOT_FOUND
    message = "User not found"
    status_code = status.HTTP_404_NOT_FOUND


class CanNotFollowError(APIError):
    code = ResponseCode.CAN_NOT_FOLLOW
    message = "You can not follow yourself"


class MediaNotFoundError(APIError):
    code = ResponseCode.MEDIA_NOT_FOUND
    message = "Media not found"
    status_code = status.HTTP_404_NOT_FOUND


class AccessDeniedError(APIError):
    code = ResponseCode.ACCESS_DENIED
    message = "Access Denied"
    status_code = status.HTTP_403_FORBIDDEN

    @classmethod
    def for_action(cls, action: str) -> "AccessDeniedError":
        return cls(
            "Access Denied - You don't have permission to: {action}",
            params={"action": action},
        )


__all__ = [
    "APIError",
    "AccessDeniedError",
    "AccountDisabledError",
    "CanNotFollowError",
    "FacebookLoginFailedError",
    "InvalidConfirmationTokenError",
    "InvalidTokenError",
    "LoginFailedError",
    "MediaNotFoundError",
    "NoSuchUserError",
    "PasswordAlreadyRequestedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
