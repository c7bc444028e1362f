"""Retry with exponential backoff for upstream fetches."""

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from image_versions.logging_config import logger

T = TypeVar("T")

MAX_RETRY_DELAY = 30.0  # seconds


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry settings for source fetches.

    Attributes:
        attempts: Maximum number of attempts (at least 1)
        delay: Initial delay between attempts in seconds
        max_delay: Upper bound for a single delay in seconds
    """

    attempts: int = 3
    delay: float = 1.0
    max_delay: float = MAX_RETRY_DELAY

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("The number of attempts must be at least 1.")
        if self.delay < 0:
            raise ValueError("The delay must be a non-negative number.")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        return min(self.delay * (2 ** (attempt - 1)), self.max_delay)


def fetch_with_retry(
    fetch: Callable[[], T],
    policy: Optional[RetryPolicy] = None,
    sleeper: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``fetch`` until it succeeds or the attempts are exhausted.

    Args:
        fetch: Callable performing the fetch
        policy: Retry settings (defaults to 3 attempts starting at 1 second)
        sleeper: Function used to wait between attempts

    Returns:
        The fetched data

    Raises:
        Exception: The error raised by the last attempt
    """
    policy = policy or RetryPolicy()
    last_error: Optional[Exception] = None

    for attempt in range(1, policy.attempts + 1):
        try:
            return fetch()
        except Exception as e:
            last_error = e
            logger.warning(f"Fetch attempt {attempt}/{policy.attempts} failed: {e}")

            if attempt < policy.attempts:
                sleeper(policy.delay_for(attempt))

    assert last_error is not None
    raise last_error
