"""Versioned API router."""

from fastapi import APIRouter

from . import accounts, health, media, users

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(media.router, prefix="/media", tags=["media"])
