"""Logging setup shared by the API process and scripts."""

from __future__ import annotations

import logging

from asgi_correlation_id import CorrelationIdFilter

from snapgram.core.config import Settings
from snapgram.security.logging_filters import SensitiveFilter

_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Attach correlation-id and redaction filters to the app's log output."""
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    if not any(getattr(h, "_snapgram", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
        handler.addFilter(SensitiveFilter())
        handler._snapgram = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
        logger = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in logger.filters):
            logger.addFilter(SensitiveFilter())
