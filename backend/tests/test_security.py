"""Token and log redaction tests."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from snapgram.core.errors import InvalidTokenError
from snapgram.core.i18n import negotiate_locale, translate
from snapgram.core.security import (
    TokenService,
    generate_opaque_token,
    get_password_hash,
    hash_token,
    verify_password,
)
from snapgram.security.logging_filters import SensitiveFilter, scrub


def test_session_token_round_trip() -> None:
    tokens = TokenService("unit-secret", expires_minutes=5)
    token = tokens.issue("user-123")
    assert tokens.verify(token) == "user-123"


def test_expired_and_tampered_tokens_are_rejected() -> None:
    tokens = TokenService("unit-secret")
    expired = tokens.issue("user-123", expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenError):
        tokens.verify(expired)

    forged = TokenService("other-secret").issue("user-123")
    with pytest.raises(InvalidTokenError):
        tokens.verify(forged)


def test_opaque_tokens_have_requested_length() -> None:
    values = {generate_opaque_token(16) for _ in range(50)}
    assert len(values) == 50
    assert all(len(value) == 16 for value in values)
    assert len(generate_opaque_token(40)) == 40
    assert hash_token("abc") != "abc"


def test_password_hashing() -> None:
    hashed = get_password_hash("pa55word")
    assert verify_password("pa55word", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("pa55word", None)


def test_scrub_redacts_credentials_and_url_tokens() -> None:
    assert "abc.def" not in scrub("Authorization: Bearer abc.def")
    assert "hunter2" not in scrub('{"password": "hunter2"}')
    assert (
        scrub("GET /api/v1/accounts/confirm/AbCdEf1234567890")
        == "GET /api/v1/accounts/confirm/**REDACTED**"
    )


def test_sensitive_filter_scrubs_record_args() -> None:
    record = logging.LogRecord(
        "snapgram",
        logging.INFO,
        __file__,
        1,
        "request %s",
        ("/api/v1/accounts/reset-password/Zz09-_abcdefghij",),
        None,
    )
    assert SensitiveFilter().filter(record)
    assert "Zz09" not in record.getMessage()


def test_locale_negotiation_and_translation() -> None:
    assert negotiate_locale("es", None) == "es"
    assert negotiate_locale("ES_mx", None) == "es"
    assert negotiate_locale(None, "fr-FR, es;q=0.5") == "es"
    assert negotiate_locale("de", "pt") == "en"
    assert translate("User not found", "es") == "Usuario no encontrado"
    assert translate("User not found", "en") == "User not found"
    assert (
        translate(
            "The password for this user has already been requested within {hours} hours.",
            "es",
            hours=24,
        )
        == "La contraseña de este usuario ya fue solicitada en las últimas 24 horas."
    )
