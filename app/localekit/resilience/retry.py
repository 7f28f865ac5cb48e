"""Retry policy for deferred initialization.

Wraps an async operation that may fail while a dependency is not ready yet
(for example the translation worker still booting) and retries it with
exponential backoff.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from localekit.configuration import RetrySettings
from localekit.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Exponential backoff policy.

    Attributes:
        max_attempts: Maximum number of attempts (first call included)
        base_delay_seconds: Delay before the second attempt
        max_delay_seconds: Cap for the exponential delay
    """

    max_attempts: int = 5
    base_delay_seconds: float = 0.5
    max_delay_seconds: float = 8.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must not be negative")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")

    @classmethod
    def from_settings(cls, retry_settings: RetrySettings) -> "RetryPolicy":
        return cls(
            max_attempts=retry_settings.max_attempts,
            base_delay_seconds=retry_settings.base_delay_seconds,
            max_delay_seconds=retry_settings.max_delay_seconds,
        )

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given zero-based failed attempt.

        Returns:
            min(base_delay * 2^attempt, max_delay)
        """
        return min(self.base_delay_seconds * (2**attempt), self.max_delay_seconds)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    operation_name: str = "operation",
) -> T:
    """Run ``operation`` until it succeeds or the policy is exhausted.

    Args:
        operation: Zero-argument coroutine factory.
        policy: Backoff policy (defaults to RetryPolicy()).
        retry_on: Exception types that trigger a retry; others propagate.
        sleep: Awaitable sleep function (injectable for tests).
        operation_name: Name used in log events.

    Returns:
        Result of the first successful call.

    Raises:
        The last exception raised by ``operation`` once attempts run out.
    """
    policy = policy or RetryPolicy()
    log = logger.bind(operation=operation_name, max_attempts=policy.max_attempts)

    for attempt in range(policy.max_attempts):
        try:
            return await operation()
        except retry_on as e:
            if attempt + 1 >= policy.max_attempts:
                log.error("retry_exhausted", attempts=attempt + 1, error=str(e))
                raise
            delay = policy.delay_for(attempt)
            log.warning(
                "retry_scheduled",
                attempt=attempt + 1,
                delay_seconds=delay,
                error=str(e),
            )
            await sleep(delay)

    # max_attempts >= 1 guarantees the loop either returns or raises
    raise RuntimeError("retry loop exited without result")
