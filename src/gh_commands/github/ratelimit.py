"""Rate limit detection for GitHub API responses.

Reads the ``x-ratelimit-*`` and ``retry-after`` headers of a single response
and decides whether that response is a rate limit rejection and how long to
wait before retrying. Nothing here is cached across calls: every decision is
made from the most recent response of the call being retried.
"""

import logging
import time
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

SECONDARY_LIMIT_MARKERS = ("secondary rate limit", "abuse detection", "rate limit exceeded")


class RateLimitKind(str, Enum):
    """Why a response was classified as rate limited."""

    PRIMARY = "primary"  # quota exhausted, wait until reset
    SECONDARY = "secondary"  # retry-after or abuse message
    AMBIGUOUS = "ambiguous"  # 403 without rate limit headers


class RateLimitInfo(BaseModel):
    """GitHub API rate limit information from response headers."""

    limit: int
    remaining: int
    reset: datetime
    used: int
    resource: str = "core"

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> Optional["RateLimitInfo"]:
        """Extract rate limit info from response headers.

        Args:
            headers: HTTP response headers.

        Returns:
            RateLimitInfo if headers present, None otherwise.
        """
        if "x-ratelimit-limit" not in headers:
            return None

        try:
            reset_timestamp = int(headers.get("x-ratelimit-reset", "0"))
            limit = int(headers.get("x-ratelimit-limit", "0"))
            remaining = int(headers.get("x-ratelimit-remaining", "0"))
            used = int(headers.get("x-ratelimit-used", "0"))
        except ValueError:
            logger.debug("Ignoring non-numeric rate limit headers")
            return None

        return cls(
            limit=limit,
            remaining=remaining,
            reset=datetime.fromtimestamp(reset_timestamp, tz=UTC),
            used=used,
            resource=headers.get("x-ratelimit-resource", "core"),
        )

    @property
    def seconds_until_reset(self) -> float:
        """Seconds from now until the quota resets (never negative)."""
        return max(0.0, self.reset.timestamp() - time.time())


def parse_retry_after(headers: httpx.Headers) -> float | None:
    """Return the ``retry-after`` header in seconds, if present and numeric."""
    value = headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        logger.debug("Ignoring non-numeric retry-after header: %s", value)
        return None


def classify_rate_limit(
    status_code: int,
    headers: httpx.Headers,
    body: Any = None,
) -> RateLimitKind | None:
    """Decide whether a response is a rate limit rejection.

    Args:
        status_code: Response status code.
        headers: Response headers.
        body: Parsed response body, used for the message heuristic.

    Returns:
        The kind of rate limit, or None if the response is not rate limited.
    """
    if status_code not in (403, 429):
        return None

    rate_limit = RateLimitInfo.from_headers(headers)
    if rate_limit is not None and rate_limit.remaining == 0:
        return RateLimitKind.PRIMARY

    if "retry-after" in headers or status_code == 429:
        return RateLimitKind.SECONDARY

    message = ""
    if isinstance(body, dict):
        message = str(body.get("message", "")).lower()
    if any(marker in message for marker in SECONDARY_LIMIT_MARKERS):
        return RateLimitKind.SECONDARY

    # A 403 without any rate limit headers cannot be told apart from a
    # secondary limit, so it gets backoff rather than an immediate failure.
    if rate_limit is None:
        return RateLimitKind.AMBIGUOUS

    return None


def rate_limit_wait_seconds(
    headers: httpx.Headers,
    min_delay: float,
) -> float:
    """Compute how long to wait before retrying a rate limited request.

    ``retry-after`` wins when present; otherwise wait until the primary quota
    resets. The result is never shorter than ``min_delay``.

    Args:
        headers: Headers of the rate limited response.
        min_delay: Configured minimum delay in seconds.

    Returns:
        Seconds to wait.
    """
    retry_after = parse_retry_after(headers)
    if retry_after is not None:
        return max(min_delay, retry_after)

    rate_limit = RateLimitInfo.from_headers(headers)
    if rate_limit is not None and rate_limit.remaining == 0:
        return max(min_delay, rate_limit.seconds_until_reset)

    return min_delay
