"""Account lifecycle: signup, confirmation, login and password resets.

Accounts start inactive and become active once the emailed confirmation
token is consumed. One-time tokens are stored as SHA-256 digests on the user
row; a new reset request is refused while the previous one is younger than
the configured reset window.
"""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snapgram.core.config import Settings
from snapgram.core.errors import (
    AccountDisabledError,
    FacebookLoginFailedError,
    InvalidConfirmationTokenError,
    InvalidTokenError,
    LoginFailedError,
    NoSuchUserError,
    PasswordAlreadyRequestedError,
    UserAlreadyExistsError,
)
from snapgram.core.security import (
    TokenService,
    generate_opaque_token,
    get_password_hash,
    hash_token,
    verify_password,
)
from snapgram.integrations.facebook_client import FacebookClient, FacebookClientError
from snapgram.models.mixins import as_utc
from snapgram.models.user import User
from snapgram.schemas.auth import SignupRequest
from snapgram.services import notification_service, user_service
from snapgram.services.notification_service import Mailer

logger = logging.getLogger(__name__)

SIGNUP_MESSAGE = "User successfully registered, check your email for more information"


@dataclass(slots=True)
class SignupOutcome:
    user: User
    confirmation_token: str
    message: str = SIGNUP_MESSAGE


@dataclass(slots=True)
class LoginOutcome:
    user: User
    access_token: str


async def _unique_token(session: AsyncSession, column, length: int) -> str:
    for _ in range(5):
        candidate = generate_opaque_token(length)
        existing = await session.execute(
            select(User.id).where(column == hash_token(candidate))
        )
        if existing.first() is None:
            return candidate
    raise RuntimeError("Failed to generate unique account token")


async def signup(
    session: AsyncSession,
    payload: SignupRequest,
    *,
    settings: Settings,
    mailer: Mailer,
) -> SignupOutcome:
    """Register an inactive user and email them a confirmation token."""
    email = str(payload.email).lower()
    if await user_service.get_user_by_email(session, email) is not None:
        raise UserAlreadyExistsError()

    raw_token = await _unique_token(
        session, User.confirmation_token, settings.confirmation_token_length
    )
    user = User(
        fullname=payload.fullname,
        username=payload.username,
        email=email,
        hashed_password=get_password_hash(payload.password),
        website=payload.website,
        biography=payload.biography,
        mobile_number=payload.mobile_number,
        is_active=False,
        confirmation_token=hash_token(raw_token),
        confirmation_token_issued_at=datetime.now(UTC),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        # lost a race against a concurrent signup, or the username is taken
        await session.rollback()
        raise UserAlreadyExistsError() from exc
    await session.refresh(user)
    logger.info("Registered user %s", user.id)

    await notification_service.send_account_confirmation(
        mailer, settings, user=user, token=raw_token
    )
    return SignupOutcome(user=user, confirmation_token=raw_token)


async def confirm_account(session: AsyncSession, token: str) -> User:
    """Activate the account owning ``token`` and consume the token."""
    result = await session.execute(
        select(User).where(User.confirmation_token == hash_token(token))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise InvalidConfirmationTokenError()

    user.is_active = True
    user.confirmation_token = None
    user.confirmation_token_issued_at = None
    await session.commit()
    logger.info("Activated user %s", user.id)
    return user


async def login(
    session: AsyncSession,
    username: str,
    password: str,
    *,
    tokens: TokenService,
) -> LoginOutcome:
    """Check credentials (existence, password, then activation) and issue a token."""
    user = await user_service.get_user_by_username(session, username)
    if user is None:
        raise LoginFailedError()
    if not verify_password(password, user.hashed_password):
        raise LoginFailedError()
    if not user.is_active:
        raise AccountDisabledError()
    return LoginOutcome(user=user, access_token=tokens.issue(str(user.id)))


def _facebook_username_seed(facebook_id: str, name: str | None) -> str:
    base = re.sub(r"[^a-z0-9_]", "", (name or "").lower().replace(" ", "_"))
    return (base or "fb")[:40] + f"_{facebook_id[-6:]}"


async def _available_username(session: AsyncSession, seed: str) -> str:
    candidate = seed
    while await user_service.get_user_by_username(session, candidate) is not None:
        candidate = f"{seed}_{uuid.uuid4().hex[:4]}"
    return candidate


def _bind_facebook_identity(user: User, facebook_id: str) -> None:
    """Attach a Facebook id to the account registered with the same email."""
    if user.facebook_id is not None:
        logger.info("User %s is already bound to another Facebook id", user.id)
        raise FacebookLoginFailedError()
    if not user.is_active:
        # unconfirmed local credentials do not carry over to the verified owner
        user.hashed_password = None
        user.reset_password_token = None
        user.reset_password_token_issued_at = None
    user.facebook_id = facebook_id
    user.is_active = True
    user.confirmation_token = None
    user.confirmation_token_issued_at = None


async def login_with_facebook(
    session: AsyncSession,
    facebook_id: str,
    access_token: str,
    *,
    facebook: FacebookClient,
    tokens: TokenService,
) -> LoginOutcome:
    """Verify a Facebook token, then find or create the bound local user."""
    try:
        profile = await facebook.verify(facebook_id, access_token)
    except FacebookClientError as exc:
        logger.info("Facebook login rejected for %s: %s", facebook_id, exc)
        raise FacebookLoginFailedError() from exc

    user = await user_service.get_user_by_facebook_id(session, profile.id)
    if user is None and profile.email:
        user = await user_service.get_user_by_email(session, profile.email)
        if user is not None:
            _bind_facebook_identity(user, profile.id)
    if user is None:
        user = User(
            fullname=profile.name or f"Facebook user {profile.id}",
            username=await _available_username(
                session, _facebook_username_seed(profile.id, profile.name)
            ),
            email=profile.email.lower() if profile.email else None,
            facebook_id=profile.id,
            is_active=True,
        )
        session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise UserAlreadyExistsError() from exc
    await session.refresh(user)

    if not user.is_active:
        raise AccountDisabledError()
    return LoginOutcome(user=user, access_token=tokens.issue(str(user.id)))


async def request_password_reset(
    session: AsyncSession,
    email: str,
    *,
    settings: Settings,
    mailer: Mailer,
) -> User:
    """Issue a reset token unless one was issued within the reset window."""
    user = await user_service.get_user_by_email(session, email)
    if user is None:
        raise NoSuchUserError()

    window = timedelta(hours=settings.password_reset_window_hours)
    now = datetime.now(UTC)
    issued_at = user.reset_password_token_issued_at
    if user.reset_password_token and issued_at and as_utc(issued_at) + window > now:
        raise PasswordAlreadyRequestedError(settings.password_reset_window_hours)

    raw_token = await _unique_token(
        session, User.reset_password_token, settings.confirmation_token_length
    )
    user.reset_password_token = hash_token(raw_token)
    user.reset_password_token_issued_at = now
    await session.commit()
    logger.info("Password reset requested for user %s", user.id)

    await notification_service.send_password_reset(
        mailer, settings, user=user, token=raw_token
    )
    return user


async def reset_password(
    session: AsyncSession,
    token: str,
    new_password: str,
    *,
    settings: Settings,
) -> User:
    """Consume a reset token and store the new password hash."""
    result = await session.execute(
        select(User).where(User.reset_password_token == hash_token(token))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise InvalidConfirmationTokenError()

    window = timedelta(hours=settings.password_reset_window_hours)
    issued_at = user.reset_password_token_issued_at
    if issued_at is None or as_utc(issued_at) + window <= datetime.now(UTC):
        raise InvalidTokenError("Password reset token has expired", status_code=400)

    user.hashed_password = get_password_hash(new_password)
    user.reset_password_token = None
    user.reset_password_token_issued_at = None
    await session.commit()
    logger.info("Password reset completed for user %s", user.id)
    return user
