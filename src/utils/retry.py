"""
Retry decorator with exponential backoff for remote DLP calls

Retries are opt-in: nothing in the directives retries unless a caller
asks for it. When enabled, only transient failures are retried:
- Exponential backoff (base 2.0)
- Jitter to prevent thundering herd
- Configurable max retries and retryable exception types
- Callback support for metrics integration

Usage:
    from utils.retry import retry_with_backoff, TRANSIENT_DLP_ERRORS

    @retry_with_backoff(max_retries=3, retryable_exceptions=TRANSIENT_DLP_ERRORS)
    def call_dlp():
        return client.deidentify_content(request=request)
"""

import logging
import random
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from google.api_core import exceptions as core_exceptions

logger = logging.getLogger(__name__)

# Failures worth another attempt: unavailable backend, deadline, quota, 5xx
TRANSIENT_DLP_ERRORS: tuple[type[Exception], ...] = (
    core_exceptions.ServiceUnavailable,
    core_exceptions.DeadlineExceeded,
    core_exceptions.TooManyRequests,
    core_exceptions.InternalServerError,
)


def compute_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float,
    jitter: bool,
) -> float:
    """
    Delay before retry number ``attempt + 1``.

    Grows as ``base_delay * exponential_base ** attempt`` capped at
    ``max_delay``; jitter adds up to +/-25% and never drops below 0.1s.
    """
    delay = min(base_delay * (exponential_base ** attempt), max_delay)

    if jitter:
        jitter_amount = delay * 0.25
        delay = delay + random.uniform(-jitter_amount, jitter_amount)
        delay = max(0.1, delay)

    return delay


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: tuple[type[Exception], ...] | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
):
    """
    Decorator that retries a function with exponential backoff

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay in seconds (default: 60.0)
        exponential_base: Base for exponential backoff (default: 2.0)
        jitter: Add random jitter to prevent thundering herd (default: True)
        retryable_exceptions: Exception types to retry (default: all exceptions)
        on_retry: Callback function(attempt, exception, delay) called on each retry

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable) -> Callable:
        func_name = getattr(func, "__name__", "function")

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)

                except Exception as e:
                    if retryable_exceptions and not isinstance(e, retryable_exceptions):
                        logger.debug(
                            f"Non-retryable exception in {func_name}: {type(e).__name__}"
                        )
                        raise

                    if attempt == max_retries:
                        logger.error(
                            f"Max retries ({max_retries}) exceeded for {func_name}: "
                            f"{type(e).__name__}: {e}"
                        )
                        raise

                    delay = compute_delay(
                        attempt, base_delay, max_delay, exponential_base, jitter
                    )

                    logger.warning(
                        f"Attempt {attempt + 1}/{max_retries} failed for {func_name}: "
                        f"{type(e).__name__}: {e}. Retrying in {delay:.2f}s..."
                    )

                    if on_retry:
                        on_retry(attempt + 1, e, delay)

                    time.sleep(delay)

            raise RuntimeError(f"Unexpected error in retry logic for {func_name}")

        return wrapper
    return decorator
