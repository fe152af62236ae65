"""
Retry - Exponential Backoff for Connector Calls.

Provides:
    - RetryPolicy: attempts and backoff configuration
    - retry_call: run a callable until it succeeds or the policy is spent

Design Notes:
    - Only exceptions the caller classifies as retryable are retried
    - The last exception is re-raised unchanged once attempts run out
    - Sleep is injectable so tests never wait
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry logic."""
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    exponential_base: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("retry delays must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (1-based)."""
        delay = self.base_delay_seconds * (self.exponential_base ** (attempt - 1))
        return min(delay, self.max_delay_seconds)


def retry_call(
    func: Callable[[], T],
    policy: RetryPolicy,
    is_retryable: Callable[[Exception], bool],
    operation_name: str = "operation",
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Execute a function with retry and exponential backoff.

    Args:
        func: Function to execute
        policy: Attempt count and backoff
        is_retryable: Decides whether a raised exception may be retried
        operation_name: Name for logging
        sleep: Sleep function (defaults to ``time.sleep``)

    Returns:
        Result of the first successful execution

    Raises:
        Exception: The last exception raised by ``func``
    """
    sleep = sleep or time.sleep

    for attempt in range(1, policy.max_attempts + 1):
        try:
            result = func()
            if attempt > 1:
                logger.info(f"{operation_name} succeeded on attempt {attempt}")
            return result

        except Exception as e:
            if not is_retryable(e):
                logger.error(f"{operation_name} failed with non-retryable error: {e}")
                raise
            if attempt >= policy.max_attempts:
                logger.error(f"{operation_name} failed after {attempt} attempts: {e}")
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                f"{operation_name} failed (attempt {attempt}/{policy.max_attempts}), "
                f"retrying in {delay:.2f}s: {e}"
            )
            sleep(delay)

    raise AssertionError("unreachable")
