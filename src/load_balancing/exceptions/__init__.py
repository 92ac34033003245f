"""
Client Load Balancing - Exception Hierarchy.

Custom exceptions for retry and failover with retry-awareness.
"""

from .base import (
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

__all__ = [
    "LoadBalancingError",
    "ConfigurationError",
    "TransportError",
    "CancellationError",
    "NoOutcomeError",
    "ResponseError",
    "RateLimitError",
    "AuthenticationError",
    "ServerError",
]
