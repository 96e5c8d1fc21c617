# Boom Deployment Planner - Exponential Backoff
# SPDX-License-Identifier: Apache-2.0

"""
Retry wrapper for outbound HTTP calls.

The wrapped operation performs one request and returns the response. Network
errors and rate limiting (HTTP 429) are retried with a delay that doubles after
every failed attempt. Once the attempt budget is spent the last error is
raised to the caller.
"""

import logging
import time
from enum import Enum
from typing import Callable

import requests

from boom_report.errors import UpstreamError, UpstreamHTTPError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY = 1.0


class RetryPolicy(str, Enum):
    """Which failures are worth another attempt"""
    STRICT = "strict"    # network errors, 429 and 5xx; other 4xx fail fast
    LENIENT = "lenient"  # every failure until the budget runs out


def is_retryable(error: UpstreamError, policy: RetryPolicy = RetryPolicy.STRICT) -> bool:
    """Decide whether a failed attempt should be retried under the policy."""
    if policy == RetryPolicy.LENIENT:
        return True
    return error.retryable


def backoff_delays(max_attempts: int, base_delay: float) -> list[float]:
    """
    Delays slept between attempts when every attempt fails.

    There is one delay fewer than attempts: nothing is slept after the last.
    """
    return [base_delay * (2 ** attempt) for attempt in range(max(max_attempts - 1, 0))]


def _attempt(operation: Callable[[], requests.Response], service: str) -> requests.Response:
    try:
        response = operation()
    except requests.RequestException as e:
        raise UpstreamUnavailableError(service, str(e) or e.__class__.__name__) from e

    if not response.ok:
        raise UpstreamHTTPError(
            service,
            status_code=response.status_code,
            reason=response.reason or "",
            body=response.text or "",
        )
    return response


def call_with_backoff(
    operation: Callable[[], requests.Response],
    *,
    service: str = "upstream",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    policy: RetryPolicy = RetryPolicy.STRICT,
    sleep: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """
    Run an HTTP operation, retrying transient failures with exponential backoff.

    Args:
        operation: Zero-argument callable performing a single request
        service: Name used in log lines and error messages
        max_attempts: Total attempts, including the first one
        base_delay: Seconds to wait after the first failure; doubles each time
        policy: Which failures are retried
        sleep: Delay function (injected in tests)

    Returns:
        The first successful response

    Raises:
        UpstreamError: The last attempt's error once retries are exhausted, or
            the first non-retryable error
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(max_attempts):
        try:
            return _attempt(operation, service)
        except UpstreamError as e:
            if not is_retryable(e, policy):
                logger.warning(f"{service} call failed permanently: {e}")
                raise
            if attempt == max_attempts - 1:
                logger.error(f"{service} call failed after {max_attempts} attempts: {e}")
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                f"{service} attempt {attempt + 1}/{max_attempts} failed ({e}); "
                f"retrying in {delay:.2f}s"
            )
            sleep(delay)

    raise AssertionError("backoff loop exited without a result")
