"""Resilience helpers - retry policy for deferred initialization."""

from localekit.resilience.retry import RetryPolicy, retry_async

__all__ = ["RetryPolicy", "retry_async"]
