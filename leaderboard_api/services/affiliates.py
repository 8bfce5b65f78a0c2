"""Affiliates proxy: fetch affiliate wager data from the Rainbet external API."""

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from leaderboard_api.core.config import Settings

logger = logging.getLogger(__name__)

AFFILIATES_PATH = "/v1/external/affiliates"


class UpstreamError(Exception):
    """Raised when the affiliates API is unconfigured, unreachable, times out or returns bad data."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


def _get_api_key(settings: "Settings") -> str:
    if settings.RAINBET_API_KEY is None:
        raise UpstreamError("RAINBET_API_KEY is not set.")
    key = settings.RAINBET_API_KEY.get_secret_value()
    if not key or not key.strip():
        raise UpstreamError("RAINBET_API_KEY is empty.")
    return key.strip()


async def fetch_affiliates(
    start_at: str,
    end_at: str,
    settings: "Settings",
) -> Any:
    """
    Return the affiliates API JSON body for the given date range, unchanged.

    Raises UpstreamError on missing key, connection failure, timeout,
    non-2xx status, or a body that is not valid JSON.
    """
    url = f"{settings.RAINBET_API_BASE_URL}{AFFILIATES_PATH}"
    params = {
        "start_at": start_at,
        "end_at": end_at,
        "key": _get_api_key(settings),
    }
    timeout = httpx.Timeout(settings.AFFILIATES_REQUEST_TIMEOUT_SEC)
    start = time.perf_counter()

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params=params)
    except httpx.TimeoutException as e:
        raise UpstreamError("Affiliates API request timed out.", cause=e) from e
    except httpx.HTTPError as e:
        raise UpstreamError("Affiliates API is unreachable.", cause=e) from e

    elapsed = time.perf_counter() - start
    log_extra = {
        "upstream_latency_seconds": elapsed,
        "upstream_status": response.status_code,
    }
    if response.status_code >= 400:
        logger.warning("Affiliates API returned an error", extra=log_extra)
        raise UpstreamError(
            f"Affiliates API returned {response.status_code}.",
            status_code=response.status_code,
        )
    try:
        data = response.json()
    except ValueError as e:
        logger.warning("Affiliates API returned invalid JSON", extra=log_extra)
        raise UpstreamError("Affiliates API returned invalid JSON.", cause=e) from e

    logger.info("Affiliates API request completed", extra=log_extra)
    return data
