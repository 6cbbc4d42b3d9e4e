"""
Retry utilities with exponential backoff for handling transient failures.
"""

import time
from functools import wraps
from typing import Callable, Type, Tuple
import structlog

from .exceptions import TransientError

logger = structlog.get_logger()


class RetryConfig:
    """Configuration for retry behavior with exponential backoff."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
        retryable_exceptions: Tuple[Type[Exception], ...] = (TransientError, ConnectionError, TimeoutError)
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Total number of attempts (1 disables retrying)
            base_delay: Initial delay in seconds before first retry
            max_delay: Maximum delay in seconds between retries
            exponential_base: Base for exponential backoff calculation
            retryable_exceptions: Tuple of exception types that should trigger retries
        """
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.retryable_exceptions = retryable_exceptions

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given zero-based attempt."""
        return min(
            self.base_delay * (self.exponential_base ** attempt),
            self.max_delay
        )


def retry_with_exponential_backoff(
    config: RetryConfig = None,
    max_attempts: int = None,
    base_delay: float = None,
    max_delay: float = None,
    exponential_base: float = None,
    retryable_exceptions: Tuple[Type[Exception], ...] = None
) -> Callable:
    """
    Decorator for automatic retry with exponential backoff.

    Can be used with a RetryConfig object or individual parameters.

    Args:
        config: RetryConfig object (if provided, other params are ignored)
        max_attempts: Total number of attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential calculation
        retryable_exceptions: Tuple of exception types to retry

    Returns:
        Decorated function with retry logic

    Example:
        @retry_with_exponential_backoff(max_attempts=3, base_delay=1.0)
        def deliver():
            # code that might fail transiently
            pass
    """
    if config is None:
        defaults = RetryConfig()
        config = RetryConfig(
            max_attempts=defaults.max_attempts if max_attempts is None else max_attempts,
            base_delay=defaults.base_delay if base_delay is None else base_delay,
            max_delay=defaults.max_delay if max_delay is None else max_delay,
            exponential_base=defaults.exponential_base if exponential_base is None else exponential_base,
            retryable_exceptions=retryable_exceptions or defaults.retryable_exceptions
        )

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except config.retryable_exceptions as e:
                    # Don't retry on last attempt
                    if attempt == config.max_attempts - 1:
                        logger.error(
                            "retry_exhausted",
                            function=func.__name__,
                            attempts=config.max_attempts,
                            error=str(e),
                            error_type=type(e).__name__
                        )
                        raise

                    delay = config.delay_for(attempt)
                    logger.warning(
                        "retry_attempt",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_attempts=config.max_attempts,
                        error=str(e),
                        error_type=type(e).__name__,
                        retry_delay_seconds=delay
                    )
                    time.sleep(delay)
                except Exception as e:
                    # Non-retryable exception, fail immediately
                    logger.error(
                        "non_retryable_error",
                        function=func.__name__,
                        error=str(e),
                        error_type=type(e).__name__
                    )
                    raise

        return wrapper
    return decorator
