"""
Client Load Balancing - Retry and failover for HTTP clients.

Sends requests through ordered retry strategies that wait, redirect to
another endpoint, or give up after throttled and failed attempts.
"""

from .clients import LoadBalancedChatClient, Message, Role
from .exceptions import (
    LoadBalancingError,
    ConfigurationError,
    TransportError,
    CancellationError,
    NoOutcomeError,
    ResponseError,
    RateLimitError,
    AuthenticationError,
    ServerError,
)
from .retry import (
    RetryPolicy,
    RetryPolicyOptions,
    ExponentialRetryConfig,
    RetryStrategy,
    RetryVerdict,
    RetryContext,
    ThrottlingRedirectStrategy,
    ThrottlingRetryStrategy,
    ExponentialRetryStrategy,
    EndpointRotator,
    DelayScheduler,
    is_throttled,
    retry_after_ms,
    load_balanced_retry_policy,
)
from .transport import Request, Response, Transport, HttpxTransport

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Clients
    "LoadBalancedChatClient",
    "Message",
    "Role",
    # Exceptions
    "LoadBalancingError",
    "ConfigurationError",
    "TransportError",
    "CancellationError",
    "NoOutcomeError",
    "ResponseError",
    "RateLimitError",
    "AuthenticationError",
    "ServerError",
    # Retry
    "RetryPolicy",
    "RetryPolicyOptions",
    "ExponentialRetryConfig",
    "RetryStrategy",
    "RetryVerdict",
    "RetryContext",
    "ThrottlingRedirectStrategy",
    "ThrottlingRetryStrategy",
    "ExponentialRetryStrategy",
    "EndpointRotator",
    "DelayScheduler",
    "is_throttled",
    "retry_after_ms",
    "load_balanced_retry_policy",
    # Transport
    "Request",
    "Response",
    "Transport",
    "HttpxTransport",
]
