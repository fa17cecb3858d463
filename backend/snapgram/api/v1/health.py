"""Liveness probe."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get(
    "/health-check",
    response_class=PlainTextResponse,
    summary="Service liveness",
)
async def health_check() -> str:
    return "OK"
