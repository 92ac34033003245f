"""
Client Load Balancing - Retry Logic.

Ordered retry strategies, throttling detection, endpoint rotation and the
retry policy that drives them.
"""

from .config import RetryPolicyOptions, ExponentialRetryConfig, DEFAULT_MAX_RETRIES
from .backoff import calculate_backoff
from .throttling import is_throttled, retry_after_ms, THROTTLING_STATUS_CODES
from .rotation import EndpointRotator, next_endpoint
from .strategies import (
    VerdictKind,
    RetryVerdict,
    RetryContext,
    RetryStrategy,
    ThrottlingRedirectStrategy,
    ThrottlingRetryStrategy,
    ExponentialRetryStrategy,
)
from .delay import DelayScheduler, delay
from .policy import RetryPolicy, load_balanced_retry_policy

__all__ = [
    "RetryPolicyOptions",
    "ExponentialRetryConfig",
    "DEFAULT_MAX_RETRIES",
    "calculate_backoff",
    "is_throttled",
    "retry_after_ms",
    "THROTTLING_STATUS_CODES",
    "EndpointRotator",
    "next_endpoint",
    "VerdictKind",
    "RetryVerdict",
    "RetryContext",
    "RetryStrategy",
    "ThrottlingRedirectStrategy",
    "ThrottlingRetryStrategy",
    "ExponentialRetryStrategy",
    "DelayScheduler",
    "delay",
    "RetryPolicy",
    "load_balanced_retry_policy",
]
