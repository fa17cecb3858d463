"""Account lifecycle endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from snapgram.api.deps import (
    SessionDep,
    SettingsDep,
    get_facebook_client,
    get_mailer,
    get_token_service,
)
from snapgram.api.rate_limit import DEFAULT_RATE_LIMIT, LOGIN_RATE_LIMIT
from snapgram.core.codes import ResponseCode
from snapgram.core.config import Settings
from snapgram.core.errors import APIError
from snapgram.core.security import TokenService
from snapgram.integrations.facebook_client import FacebookClient
from snapgram.schemas.auth import (
    FacebookSigninRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    SigninRequest,
    SignupRequest,
    SignupResult,
)
from snapgram.schemas.envelope import Envelope
from snapgram.services import account_service
from snapgram.services.notification_service import Mailer

router = APIRouter()

MailerDep = Annotated[Mailer, Depends(get_mailer)]
TokensDep = Annotated[TokenService, Depends(get_token_service)]


def _require_token_length(token: str, settings: Settings) -> None:
    expected = settings.confirmation_token_length
    if len(token) != expected:
        raise APIError(
            '"token" length must be {length} characters long',
            code=ResponseCode.VALIDATION_ERROR,
            params={"length": expected},
        )


@router.post(
    "/signup",
    response_model=Envelope[SignupResult],
    summary="Register a new account",
    dependencies=[DEFAULT_RATE_LIMIT],
)
async def signup(
    payload: SignupRequest,
    session: SessionDep,
    settings: SettingsDep,
    mailer: MailerDep,
) -> Envelope[SignupResult]:
    outcome = await account_service.signup(
        session, payload, settings=settings, mailer=mailer
    )
    return Envelope[SignupResult].success(
        ResponseCode.CREATE_USER_SUCCESS,
        SignupResult(id=outcome.user.id, message=outcome.message),
    )


@router.get(
    "/confirm/{token}",
    response_model=Envelope[str],
    summary="Activate an account",
)
async def confirm_account(
    token: str, session: SessionDep, settings: SettingsDep
) -> Envelope[str]:
    _require_token_length(token, settings)
    await account_service.confirm_account(session, token)
    return Envelope[str].success(
        ResponseCode.ACCOUNT_ACTIVATED, "The account was successfully activated"
    )


@router.post(
    "/signin",
    response_model=Envelope[str],
    summary="Obtain a session token",
    dependencies=[LOGIN_RATE_LIMIT],
)
async def signin(
    payload: SigninRequest, session: SessionDep, tokens: TokensDep
) -> Envelope[str]:
    outcome = await account_service.login(
        session, payload.username, payload.password, tokens=tokens
    )
    return Envelope[str].success(ResponseCode.LOGIN_SUCCESS, outcome.access_token)


@router.post(
    "/signin/facebook",
    response_model=Envelope[str],
    summary="Obtain a session token with Facebook",
    dependencies=[LOGIN_RATE_LIMIT],
)
async def signin_with_facebook(
    payload: FacebookSigninRequest,
    session: SessionDep,
    tokens: TokensDep,
    facebook: Annotated[FacebookClient, Depends(get_facebook_client)],
) -> Envelope[str]:
    outcome = await account_service.login_with_facebook(
        session, payload.id, payload.token, facebook=facebook, tokens=tokens
    )
    return Envelope[str].success(
        ResponseCode.LOGIN_SUCCESS_WITH_FACEBOOK, outcome.access_token
    )


@router.post(
    "/reset-password",
    response_model=Envelope[str],
    summary="Request a password reset email",
    dependencies=[DEFAULT_RATE_LIMIT],
)
async def request_password_reset(
    payload: PasswordResetRequest,
    session: SessionDep,
    settings: SettingsDep,
    mailer: MailerDep,
) -> Envelope[str]:
    user = await account_service.request_password_reset(
        session, str(payload.email), settings=settings, mailer=mailer
    )
    return Envelope[str].success(
        ResponseCode.PASSWORD_RESET_REQUEST_MADE,
        f"We have sent an email to {user.email}. "
        "It contains a link for you to click to reset your password.",
    )


@router.post(
    "/reset-password/{token}",
    response_model=Envelope[str],
    summary="Reset the password with an emailed token",
    dependencies=[DEFAULT_RATE_LIMIT],
)
async def reset_password(
    token: str,
    payload: PasswordResetConfirm,
    session: SessionDep,
    settings: SettingsDep,
) -> Envelope[str]:
    _require_token_length(token, settings)
    await account_service.reset_password(
        session, token, payload.password, settings=settings
    )
    return Envelope[str].success(
        ResponseCode.PASSWORD_SUCCESSFULLY_RESET, "Password successfully reset"
    )
