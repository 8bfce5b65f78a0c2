"""Liveness endpoint."""

from fastapi import APIRouter

from leaderboard_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def get_health() -> HealthResponse:
    """Return service liveness. Used by load balancers and monitoring."""
    return HealthResponse(status="OK", message="Roobet Leaderboard API is running")
