"""HTTP retry utilities for external API calls.

Provides retry logic with exponential backoff for HTTP requests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Collection

logger = logging.getLogger(__name__)

DEFAULT_RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _retry_after_seconds(response: httpx.Response) -> float | None:
    """Parse a numeric Retry-After header (seconds)."""
    raw = response.headers.get("Retry-After")
    if not raw:
        return None
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return None


def _backoff_delay(attempt: int, initial_delay: float, backoff_factor: float, max_delay: float) -> float:
    return min(initial_delay * (backoff_factor**attempt), max_delay)


async def http_request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    retryable_status_codes: Collection[int] | None = None,
    **kwargs,
) -> httpx.Response:
    """Make HTTP request with retry logic and exponential backoff.

    Args:
        client: httpx AsyncClient instance
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        max_retries: Maximum number of retry attempts
        initial_delay: Initial delay in seconds before first retry
        max_delay: Maximum delay between retries
        backoff_factor: Multiplier for exponential backoff
        retryable_status_codes: HTTP status codes that should trigger retry
        **kwargs: Additional arguments passed to client.request()

    Returns:
        httpx.Response object

    Raises:
        httpx.HTTPStatusError: If request fails after all retries
        httpx.RequestError: If request fails due to network error
    """
    if retryable_status_codes is None:
        retryable_status_codes = DEFAULT_RETRYABLE_STATUS_CODES

    attempt = 0
    while True:
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code not in retryable_status_codes:
                logger.error("HTTP %d (non-retryable): %s %s", status_code, method, url)
                raise
            if attempt >= max_retries:
                logger.error(
                    "HTTP %d after %d attempts, giving up: %s %s",
                    status_code,
                    attempt + 1,
                    method,
                    url,
                )
                raise
            delay = _backoff_delay(attempt, initial_delay, backoff_factor, max_delay)
            retry_after = _retry_after_seconds(e.response)
            if retry_after is not None:
                delay = min(max(delay, retry_after), max_delay)
            reason = f"HTTP {status_code}"
        except httpx.RequestError as e:
            if attempt >= max_retries:
                logger.error(
                    "Network error after %d attempts: %s %s - %s",
                    attempt + 1,
                    method,
                    url,
                    e,
                )
                raise
            delay = _backoff_delay(attempt, initial_delay, backoff_factor, max_delay)
            reason = f"network error ({str(e)[:100]})"
        else:
            if attempt:
                logger.info("%s %s succeeded on attempt %d", method, url, attempt + 1)
            return response

        attempt += 1
        logger.warning(
            "%s, retrying %s %s in %.2fs (%d/%d)",
            reason,
            method,
            url,
            delay,
            attempt,
            max_retries,
        )
        await asyncio.sleep(delay)
