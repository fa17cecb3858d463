"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis  # type: ignore[import-untyped]
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from secure import Secure
from starlette.exceptions import HTTPException as StarletteHTTPException

from snapgram.api import build_api_router
from snapgram.core.codes import ResponseCode
from snapgram.core.config import Settings, get_settings
from snapgram.core.errors import APIError
from snapgram.core.i18n import request_locale, translate
from snapgram.core.logging import configure_logging
from snapgram.core.security import TokenService
from snapgram.db.session import create_schema, dispose_engine
from snapgram.integrations.facebook_client import FacebookClient
from snapgram.schemas.envelope import ErrorEnvelope
from snapgram.services.notification_service import Mailer

logger = logging.getLogger(__name__)


def _error_response(
    request: Request, code: ResponseCode, message: str, status_code: int
) -> JSONResponse:
    locale = request_locale(request)
    body = ErrorEnvelope(code=int(code), message=translate(message, locale))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = [
            str(item)
            for item in error.get("loc", ())
            if item not in ("body", "query", "path")
        ]
        field = loc[-1] if loc else "request"
        parts.append(f'"{field}" {error.get("msg", "is invalid")}')
    return " and ".join(parts) or "Invalid request"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def _api_error(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(request_locale(request)),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            request,
            ResponseCode.VALIDATION_ERROR,
            _describe_validation_errors(exc),
            status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error_response(
                request, ResponseCode.API_NOT_FOUND, "API not found", exc.status_code
            )
        return _error_response(
            request, ResponseCode.BAD_REQUEST, str(exc.detail), exc.status_code
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            request,
            ResponseCode.INTERNAL_SERVER_ERROR,
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        redis_pool = None
        if settings.redis_url:
            try:
                redis_pool = redis.from_url(
                    settings.redis_url, encoding="utf-8", decode_responses=True
                )
                await FastAPILimiter.init(redis_pool)
            except Exception:  # pragma: no cover - limiter startup is best effort
                logger.exception("Failed to initialize rate limiter")
        if settings.auto_create_schema:
            await create_schema(settings.database_url)
        try:
            yield
        finally:
            if redis_pool is not None:
                try:
                    await FastAPILimiter.close()
                    await redis_pool.aclose()
                except Exception:  # pragma: no cover - limiter shutdown
                    logger.exception("Failed to close rate limiter")
            await dispose_engine(settings.database_url)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.mailer = Mailer(settings)
    app.state.facebook_client = FacebookClient.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin for origin in settings.cors_allow_origins if origin],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    secure_headers = Secure.with_default_headers()

    @app.middleware("http")
    async def _apply_security_headers(request, call_next):
        response = await call_next(request)
        secure_headers.set_headers(response)
        return response

    _register_exception_handlers(app)
    app.include_router(build_api_router(settings.api_v1_prefix))
    return app


app = create_app()
