"""Deferred initialization retry settings."""

from pydantic import Field

from localekit.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Retry policy for initializing the translation runtime.

    Used at the composition boundary when the catalog source is not ready
    yet (worker still starting, files not generated).

    Environment Variables:
        RETRY_MAX_ATTEMPTS: Maximum attempts before giving up (default: 5)
        RETRY_BASE_DELAY_SECONDS: Base exponential backoff delay (default: 0.5s)
        RETRY_MAX_DELAY_SECONDS: Maximum backoff delay (default: 8s)

    Exponential Backoff:
        Delay calculation: min(base_delay * (2 ^ attempt), max_delay)

        Example with defaults (base=0.5s, max=8s):
            Attempt 1: 0.5s
            Attempt 2: 1s
            Attempt 3: 2s
            Attempt 4: 4s
    """

    max_attempts: int = Field(
        default=5,
        alias="RETRY_MAX_ATTEMPTS",
        description="Maximum initialization attempts",
    )
    base_delay_seconds: float = Field(
        default=0.5,
        alias="RETRY_BASE_DELAY_SECONDS",
        description="Base delay for exponential backoff (seconds)",
    )
    max_delay_seconds: float = Field(
        default=8.0,
        alias="RETRY_MAX_DELAY_SECONDS",
        description="Maximum delay for exponential backoff (seconds)",
    )
