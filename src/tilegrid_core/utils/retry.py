"""Busy retry with exponential backoff.

A FetchCoordinator answers Busy instead of queuing. Retrying is up to the
caller; these helpers do it the usual way, doubling the delay each time.
"""

import asyncio
from typing import Optional

from loguru import logger

from ..models.config import DEFAULT_RETRY_INITIAL_DELAY, DEFAULT_RETRY_MAX_DELAY
from ..models.core import DisplayHints, FetchResult


def next_delay(delay: float, max_delay: Optional[float] = None) -> float:
    """Double a retry delay, capped at max_delay."""
    doubled = delay * 2
    if max_delay is not None:
        return min(doubled, max_delay)
    return doubled


async def fetch_with_backoff(
    coordinator,
    start_index: int,
    count: int,
    hints: DisplayHints,
    initial_delay: float = DEFAULT_RETRY_INITIAL_DELAY,
    max_delay: Optional[float] = DEFAULT_RETRY_MAX_DELAY,
    max_attempts: Optional[int] = None
) -> FetchResult:
    """Call coordinator.try_fetch until it is not busy.

    Args:
        coordinator: A FetchCoordinator (anything with an async try_fetch)
        start_index: First index wanted
        count: Number of entries wanted
        hints: Display hints
        initial_delay: Wait before the first retry, in seconds
        max_delay: Upper bound for the wait (None for no bound)
        max_attempts: Give up after this many calls (None retries forever)

    Returns:
        The first ready result, or the last busy result if attempts ran out
    """
    delay = initial_delay
    attempts = 0

    while True:
        result = await coordinator.try_fetch(start_index, count, hints)
        attempts += 1
        if not result.is_busy:
            return result

        if max_attempts is not None and attempts >= max_attempts:
            logger.debug(f"fetch_with_backoff: Still busy after {attempts} attempts, giving up")
            return result

        logger.debug(f"fetch_with_backoff: Busy, retrying {start_index}+{count} in {delay:.3f}s")
        await asyncio.sleep(delay)
        delay = next_delay(delay, max_delay)
