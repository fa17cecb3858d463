"""Tests for the account lifecycle service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from snapgram.core.errors import (
    AccountDisabledError,
    InvalidConfirmationTokenError,
    LoginFailedError,
    PasswordAlreadyRequestedError,
    UserAlreadyExistsError,
)
from snapgram.core.security import TokenService, hash_token
from snapgram.schemas.auth import SignupRequest
from snapgram.services import account_service, user_service

pytestmark = pytest.mark.asyncio


def _payload(**overrides: str) -> SignupRequest:
    data = {
        "fullname": "Jane Roe",
        "username": "janeroe",
        "email": "Jane@Example.com",
        "password": "pass1234",
    }
    data.update(overrides)
    return SignupRequest(**data)


async def test_signup_stores_only_token_digest(
    db_session, settings, mailer
) -> None:
    outcome = await account_service.signup(
        db_session, _payload(), settings=settings, mailer=mailer
    )

    user = outcome.user
    assert user.email == "jane@example.com"
    assert user.is_active is False
    assert user.confirmation_token == hash_token(outcome.confirmation_token)
    assert user.confirmation_token != outcome.confirmation_token
    assert mailer.last_token() == outcome.confirmation_token


async def test_duplicate_username_maps_to_user_exists(
    db_session, settings, mailer
) -> None:
    await account_service.signup(
        db_session, _payload(), settings=settings, mailer=mailer
    )

    with pytest.raises(UserAlreadyExistsError):
        await account_service.signup(
            db_session,
            _payload(email="second@example.com"),
            settings=settings,
            mailer=mailer,
        )
    assert len(mailer.outbox) == 1


async def test_confirm_then_login(db_session, settings, mailer) -> None:
    tokens = TokenService.from_settings(settings)
    outcome = await account_service.signup(
        db_session, _payload(), settings=settings, mailer=mailer
    )

    with pytest.raises(AccountDisabledError):
        await account_service.login(db_session, "janeroe", "pass1234", tokens=tokens)

    await account_service.confirm_account(db_session, outcome.confirmation_token)
    with pytest.raises(InvalidConfirmationTokenError):
        await account_service.confirm_account(db_session, outcome.confirmation_token)

    result = await account_service.login(
        db_session, "janeroe", "pass1234", tokens=tokens
    )
    assert tokens.verify(result.access_token) == str(outcome.user.id)


async def test_wrong_password_is_checked_before_activation(
    db_session, settings, mailer
) -> None:
    tokens = TokenService.from_settings(settings)
    await account_service.signup(
        db_session, _payload(), settings=settings, mailer=mailer
    )

    with pytest.raises(LoginFailedError):
        await account_service.login(db_session, "janeroe", "wrong", tokens=tokens)


async def test_reset_request_window(
    db_session, settings, mailer, create_user
) -> None:
    await create_user("windowed")

    await account_service.request_password_reset(
        db_session, "windowed@example.com", settings=settings, mailer=mailer
    )
    with pytest.raises(PasswordAlreadyRequestedError):
        await account_service.request_password_reset(
            db_session, "windowed@example.com", settings=settings, mailer=mailer
        )

    user = await user_service.get_user_by_email(db_session, "windowed@example.com")
    assert user is not None
    user.reset_password_token_issued_at = datetime.now(UTC) - timedelta(
        hours=settings.password_reset_window_hours, minutes=1
    )
    await db_session.commit()

    await account_service.request_password_reset(
        db_session, "windowed@example.com", settings=settings, mailer=mailer
    )
    assert len(mailer.outbox) == 2
    assert user.reset_password_token == hash_token(mailer.last_token())
