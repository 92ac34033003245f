"""
Retry policy and backoff configuration.
"""

from dataclasses import dataclass

from ..exceptions import ConfigurationError

DEFAULT_MAX_RETRIES = 3


@dataclass
class RetryPolicyOptions:
    """
    Options for the retry policy.

    Attributes:
        max_retries: Retries allowed after the initial attempt (default: 3)
    """

    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConfigurationError(
                f"max_retries must be >= 0, got {self.max_retries}"
            )

    @classmethod
    def aggressive(cls) -> "RetryPolicyOptions":
        """Preset for aggressive retry (more attempts)."""
        return cls(max_retries=10)

    @classmethod
    def no_retry(cls) -> "RetryPolicyOptions":
        """Preset for no retry (single attempt only)."""
        return cls(max_retries=0)


@dataclass
class ExponentialRetryConfig:
    """
    Configuration for exponential backoff between attempts.

    Attributes:
        retry_delay_ms: Base delay in milliseconds (default: 1000)
        max_retry_delay_ms: Maximum delay cap in milliseconds (default: 64000)
        jitter: Jitter factor as fraction of delay (default: 0.2 = ±20%)
        ignore_transport_errors: Never retry on transport errors
        ignore_status_codes: Never retry on 408/5xx responses
    """

    retry_delay_ms: float = 1000.0
    max_retry_delay_ms: float = 64000.0
    jitter: float = 0.2
    ignore_transport_errors: bool = False
    ignore_status_codes: bool = False

    def __post_init__(self) -> None:
        if self.retry_delay_ms < 0 or self.max_retry_delay_ms < 0:
            raise ConfigurationError("Retry delays must be >= 0")
        if not 0 <= self.jitter <= 1:
            raise ConfigurationError(f"jitter must be within [0, 1], got {self.jitter}")

    @classmethod
    def conservative(cls) -> "ExponentialRetryConfig":
        """Preset for short delays."""
        return cls(retry_delay_ms=500.0, max_retry_delay_ms=10000.0)
