"""
Exception hierarchy for load-balanced request execution.

Each exception includes a `retryable` flag indicating whether a retry
strategy may safely resend the same request.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..transport.models import Request, Response


class LoadBalancingError(Exception):
    """Base exception for all load balancing errors."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (status: {self.status_code})"
        return self.message


class ConfigurationError(LoadBalancingError, ValueError):
    """Raised when endpoints, options or verdicts are malformed."""


class TransportError(LoadBalancingError):
    """
    Raised by a transport when an attempt fails below the HTTP layer.

    The response is attached when the server sent one before the failure,
    so strategies can still inspect it.
    """

    def __init__(
        self,
        message: str = "Transport failed",
        *,
        retryable: bool = True,
        request: "Request | None" = None,
        response: "Response | None" = None,
        **kwargs,
    ):
        if response is not None:
            kwargs.setdefault("status_code", response.status_code)
        super().__init__(message, retryable=retryable, **kwargs)
        self.request = request
        self.response = response


class CancellationError(LoadBalancingError):
    """Raised when the request's abort signal fires. Never retryable."""

    def __init__(self, message: str = "The operation was aborted."):
        super().__init__(message, retryable=False)


class NoOutcomeError(LoadBalancingError):
    """Raised when the retry ceiling is hit with neither a response nor an error."""

    def __init__(
        self,
        message: str = "Maximum retries reached with no response or error to throw",
    ):
        super().__init__(message, retryable=False)


class ResponseError(LoadBalancingError):
    """Raised by clients when the final response is not a success."""

    def __init__(
        self,
        message: str = "Request failed",
        *,
        response: "Response | None" = None,
        **kwargs,
    ):
        if response is not None:
            kwargs.setdefault("status_code", response.status_code)
        super().__init__(message, **kwargs)
        self.response = response


class RateLimitError(ResponseError):
    """Raised when every attempt came back throttled. Always retryable."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after_ms: float | None = None,
        **kwargs,
    ):
        super().__init__(message, retryable=True, **kwargs)
        self.retry_after_ms = retry_after_ms


class AuthenticationError(ResponseError):
    """Raised when the endpoint rejects the supplied credentials. Not retryable."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class ServerError(ResponseError):
    """Raised when the endpoint returns a 5xx error. Usually retryable."""

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, retryable=True, **kwargs)
