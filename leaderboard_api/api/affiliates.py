"""Affiliates endpoint: proxy the Rainbet affiliates API for a date range."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from leaderboard_api.core.config import Settings, get_settings
from leaderboard_api.services.affiliates import UpstreamError, fetch_affiliates

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=None)
async def get_affiliates(
    settings: Annotated[Settings, Depends(get_settings)],
    start_at: Annotated[str | None, Query()] = None,
    end_at: Annotated[str | None, Query()] = None,
) -> Any:
    """
    Return affiliate data between start_at and end_at, as sent by Rainbet.
    Upstream failures are reported as a single 500 without upstream detail.
    """
    if not start_at or not end_at:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing start_at or end_at parameter"},
        )
    try:
        return await fetch_affiliates(start_at, end_at, settings)
    except UpstreamError as e:
        logger.error(
            "Affiliates fetch failed: %s",
            e.message,
            extra={"upstream_status": e.status_code},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch affiliates data"},
        )
