"""
Concurrency limiting and retry with backoff for page navigation.
"""

import asyncio
import functools
import logging
import random
from typing import Any, Callable, Coroutine, Tuple, Type, TypeVar

from playwright.async_api import Error as PlaywrightError

from scraper.config.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Navigation failures worth another attempt on the same session
RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (PlaywrightError, asyncio.TimeoutError)


class RateLimiter:
    """
    Caps the number of tabs open at once. Usable as ``async with limiter:``.
    """

    def __init__(self, max_concurrent: int):
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def __aenter__(self):
        await self._semaphore.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._semaphore.release()


page_limiter = RateLimiter(settings.MAX_CONCURRENT_PAGES)


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Exponential delay for the given 0-based attempt, capped, plus up to 50% jitter."""
    delay = min(base_delay * (2**attempt), max_delay)
    return delay + random.uniform(0, 0.5 * delay)


def with_retry(
    max_retries: int = settings.MAX_RETRIES,
    base_delay: float = settings.RETRY_BASE_DELAY,
    max_delay: float = settings.RETRY_MAX_DELAY,
    retry_on: Tuple[Type[BaseException], ...] = RETRYABLE_ERRORS,
):
    """
    Retry an async function on ``retry_on`` errors, sleeping with exponential
    backoff and jitter between attempts. After ``max_retries`` retries the
    last error is re-raised; any other exception propagates immediately.
    """

    def decorator(
        func: Callable[..., Coroutine[Any, Any, T]],
    ) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_retries:
                        logger.error(f"Giving up on {func.__name__} after {attempt + 1} attempts: {e}")
                        raise

                    sleep_time = backoff_delay(attempt, base_delay, max_delay)
                    logger.warning(
                        f"Attempt {attempt + 1}/{max_retries + 1} of {func.__name__} failed, "
                        f"retrying in {sleep_time:.2f}s: {e}"
                    )
                    await asyncio.sleep(sleep_time)

        return wrapper

    return decorator
