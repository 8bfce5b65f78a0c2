"""API routes."""

from fastapi import APIRouter

from leaderboard_api.api import affiliates, auth, health

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/api/auth", tags=["auth"])
router.include_router(affiliates.router, prefix="/api/affiliates", tags=["affiliates"])
