"""
Retry utility for rate-limited upstream calls.

Data sources that answer HTTP 429 are retried after a fixed delay,
a bounded number of times.  Any other error propagates immediately.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from footprint.utils import errors, logger

log = logger.create_logger("Retry")

T = TypeVar("T")


def is_rate_limit_error(error: BaseException) -> bool:
    """Check if the error is a rate limit (429) error."""
    if isinstance(error, errors.RateLimitedError):
        return True
    return getattr(error, "status", None) == 429


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 1,
    delay_seconds: float = 2.0,
    context: str | None = None,
) -> T:
    """
    Execute an async function, retrying only after rate-limit errors.
    Waits a fixed *delay_seconds* before every retry.
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as error:
            if not is_rate_limit_error(error):
                raise

            if attempt >= max_retries:
                log.warn(
                    "All retry attempts exhausted",
                    {"context": context, "attempts": attempt + 1},
                )
                raise

            attempt += 1
            log.warn(
                "Rate limited, retrying after fixed delay",
                {
                    "context": context,
                    "attempt": attempt,
                    "maxRetries": max_retries,
                    "delaySeconds": delay_seconds,
                },
            )
            await asyncio.sleep(delay_seconds)
