"""Transactional email rendering and delivery."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from snapgram.core.config import Settings
from snapgram.models.user import User

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
    keep_trailing_newline=True,
)


def build_confirmation_email(*, fullname: str, confirm_url: str) -> tuple[str, str]:
    subject = "Confirm your Snapgram account"
    body = _ENV.get_template("confirm_account.txt").render(
        fullname=fullname, confirm_url=confirm_url
    )
    return subject, body


def build_password_reset_email(
    *, fullname: str, reset_url: str, window_hours: int
) -> tuple[str, str]:
    subject = "Reset your Snapgram password"
    body = _ENV.get_template("reset_password.txt").render(
        fullname=fullname, reset_url=reset_url, window_hours=window_hours
    )
    return subject, body


class Mailer:
    """Delivers plain-text email over SMTP without blocking the event loop."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return bool(self._settings.smtp_host and self._settings.smtp_port)

    async def send(
        self, *, recipients: Iterable[str], subject: str, body: str
    ) -> bool:
        """Send a message; returns False when skipped or delivery failed."""
        recipients_list = [addr for addr in recipients if addr]
        if not recipients_list:
            logger.debug("No recipients provided for email; skipping")
            return False
        if not self.enabled:
            logger.info("SMTP settings missing; skipping email to %s", recipients_list)
            return False
        try:
            await asyncio.to_thread(self._deliver, recipients_list, subject, body)
        except Exception as exc:  # pragma: no cover - network dependent
            logger.exception("Failed to send email to %s: %s", recipients_list, exc)
            return False
        logger.info("Email sent to %s", recipients_list)
        return True

    def _deliver(self, recipients: list[str], subject: str, body: str) -> None:
        settings = self._settings
        message = EmailMessage()
        message["Subject"] = subject
        message["To"] = ", ".join(recipients)
        message["From"] = (
            settings.smtp_from or settings.smtp_username or "no-reply@snapgram.local"
        )
        message.set_content(body)

        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=5) as smtp:
            if settings.smtp_username and settings.smtp_password:
                smtp.starttls()
                smtp.login(settings.smtp_username, settings.smtp_password)
            smtp.send_message(message)


def _account_url(settings: Settings, path: str) -> str:
    base = settings.public_base_url.rstrip("/")
    return f"{base}{settings.api_v1_prefix}/accounts/{path}"


async def send_account_confirmation(
    mailer: Mailer, settings: Settings, *, user: User, token: str
) -> bool:
    subject, body = build_confirmation_email(
        fullname=user.fullname, confirm_url=_account_url(settings, f"confirm/{token}")
    )
    return await mailer.send(recipients=[user.email or ""], subject=subject, body=body)


async def send_password_reset(
    mailer: Mailer, settings: Settings, *, user: User, token: str
) -> bool:
    subject, body = build_password_reset_email(
        fullname=user.fullname,
        reset_url=_account_url(settings, f"reset-password/{token}"),
        window_hours=settings.password_reset_window_hours,
    )
    return await mailer.send(recipients=[user.email or ""], subject=subject, body=body)
