"""
@PURPOSE: Generic async retry with backoff, shared by login and click retries
@OUTLINE:
  - async def retry_with_backoff(): retry an awaitable factory with growing delay
@DEPENDENCIES:
  - External: loguru
@RELATED: user_login_helpers.py, page_helpers.py
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger

T = TypeVar("T")


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay: float = 2.0,
    backoff_factor: float = 1.5,
    operation_name: str = "operation",
    on_retry: Callable[[int, Exception | None, str | None], None] | None = None,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Retry with exponential backoff.

    Args:
        func: Zero-argument coroutine factory
        max_retries: Total number of attempts
        initial_delay: Delay before the second attempt (seconds)
        backoff_factor: Delay multiplier per attempt; 1.0 gives a fixed delay
        operation_name: Name used in log messages
        on_retry: Callback (attempt, exception, message) before each wait
        retry_on: Exception types that trigger a retry, others propagate immediately

    Returns:
        The result of the first successful attempt

    Raises:
        The exception from the last attempt

    Examples:
        >>> await retry_with_backoff(
        ...     lambda: helpers.login_as_admin("1087"),
        ...     max_retries=2,
        ...     backoff_factor=1.0,
        ...     operation_name="ADMIN login"
        ... )
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    last_exception: Exception | None = None
    delay = initial_delay

    for attempt in range(1, max_retries + 1):
        try:
            result = await func()
            if attempt > 1:
                logger.success(f"{operation_name} succeeded on attempt {attempt}")
            return result
        except retry_on as e:
            last_exception = e
            if attempt < max_retries:
                logger.warning(f"{operation_name} failed (attempt {attempt}/{max_retries}): {e}")
                if on_retry:
                    on_retry(attempt, e, str(e))
                logger.info(f"Retrying in {delay:.1f}s...")
                await asyncio.sleep(delay)
                delay *= backoff_factor
            else:
                logger.error(f"{operation_name} failed after {max_retries} attempts: {e}")

    if last_exception:
        raise last_exception
    raise RuntimeError(f"{operation_name} failed without raising an exception")
