"""
Retry utilities for translation provider calls
"""

import asyncio
import functools
import logging
from typing import Any, Callable

import aiohttp

logger = logging.getLogger(__name__)

# Network failures worth another attempt; API errors are not retried
TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def retry_async(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple = TRANSIENT_ERRORS
):
    """
    Decorator for retrying async functions

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between attempts in seconds
        backoff_factor: Factor to increase delay
        exceptions: Tuple of exceptions to retry on
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            current_delay = delay

            for attempt in range(1, max_attempts + 1):
                try:
                    result = await func(*args, **kwargs)
                    if attempt > 1:
                        logger.info(f"{func.__qualname__} succeeded on attempt {attempt}")
                    return result

                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(f"{func.__qualname__} failed after {max_attempts} attempts: {e}")
                        raise

                    logger.warning(
                        f"{func.__qualname__} failed on attempt {attempt}: {e}. Retrying in {current_delay}s..."
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= backoff_factor

        return wrapper
    return decorator
