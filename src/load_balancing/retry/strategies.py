"""
Retry strategies.

A strategy is consulted after every attempt and answers with a verdict:
skip (no opinion), throw an error, wait and resend, or redirect the request
to another URL. The policy walks its strategies in order and acts on the
first verdict that is not a skip.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .backoff import calculate_backoff
from .config import ExponentialRetryConfig
from .rotation import EndpointRotator
from .throttling import is_throttled, retry_after_ms
from ..exceptions import ConfigurationError, TransportError
from ..transport.models import Request, Response


class VerdictKind(str, Enum):
    """What a strategy wants the policy to do next."""

    SKIP = "skip"
    THROW = "throw"
    WAIT = "wait"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class RetryVerdict:
    """
    A strategy's decision. Exactly the field matching `kind` is populated.

    Attributes:
        kind: Verdict type
        error: Error to raise (THROW)
        delay_ms: Milliseconds to wait before resending (WAIT)
        redirect_to: URL to resend to (REDIRECT)
    """

    kind: VerdictKind
    error: BaseException | None = None
    delay_ms: float | None = None
    redirect_to: str | None = None

    def __post_init__(self) -> None:
        populated = {
            name
            for name in ("error", "delay_ms", "redirect_to")
            if getattr(self, name) is not None
        }
        expected = {
            VerdictKind.SKIP: set(),
            VerdictKind.THROW: {"error"},
            VerdictKind.WAIT: {"delay_ms"},
            VerdictKind.REDIRECT: {"redirect_to"},
        }[self.kind]
        if populated != expected:
            raise ConfigurationError(
                f"{self.kind.value} verdict must set exactly {sorted(expected)}, "
                f"got {sorted(populated)}"
            )
        if self.delay_ms is not None and self.delay_ms < 0:
            raise ConfigurationError(f"delay_ms must be >= 0, got {self.delay_ms}")

    @classmethod
    def skip(cls) -> "RetryVerdict":
        return cls(kind=VerdictKind.SKIP)

    @classmethod
    def throw(cls, error: BaseException) -> "RetryVerdict":
        return cls(kind=VerdictKind.THROW, error=error)

    @classmethod
    def wait(cls, delay_ms: float) -> "RetryVerdict":
        return cls(kind=VerdictKind.WAIT, delay_ms=delay_ms)

    @classmethod
    def redirect(cls, url: str) -> "RetryVerdict":
        return cls(kind=VerdictKind.REDIRECT, redirect_to=url)


@dataclass
class RetryContext:
    """
    State of one logical request, as seen by strategies.

    Attributes:
        attempt_count: Zero-based number of the attempt just made
        response: Response of that attempt, if any
        error: TransportError of that attempt, if any
        request: Request that attempt was sent as, if known
    """

    attempt_count: int = 0
    response: Response | None = None
    error: TransportError | None = None
    request: Request | None = None

    @property
    def sent_request(self) -> Request | None:
        """The request of the attempt, falling back to the one on the response."""
        if self.request is not None:
            return self.request
        return self.response.request if self.response is not None else None


class RetryStrategy(ABC):
    """
    Abstract base class for retry strategies.

    Attributes:
        name: Identifier used in log lines
        logger: Optional logger; the policy's logger is used when unset
    """

    name: str = "retryStrategy"

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger

    @abstractmethod
    def retry(self, context: RetryContext) -> RetryVerdict:
        """Decide what to do after an attempt."""
        ...


class ThrottlingRedirectStrategy(RetryStrategy):
    """
    Redirects throttled requests to the next endpoint in the list.

    Only the base URL changes; path and query string are kept.
    """

    name = "throttlingRedirectStrategy"

    def __init__(
        self,
        endpoints: Sequence[str] | EndpointRotator,
        logger: logging.Logger | None = None,
    ):
        super().__init__(logger)
        self.rotator = (
            endpoints if isinstance(endpoints, EndpointRotator) else EndpointRotator(endpoints)
        )

    def retry(self, context: RetryContext) -> RetryVerdict:
        request = context.sent_request
        if not is_throttled(context.response) or request is None:
            return RetryVerdict.skip()

        redirect_to = self.rotator.redirect_url(request.url, context.attempt_count + 1)
        return RetryVerdict.redirect(redirect_to)


class ThrottlingRetryStrategy(RetryStrategy):
    """Waits as long as a throttled response asks before resending."""

    name = "throttlingRetryStrategy"

    def retry(self, context: RetryContext) -> RetryVerdict:
        wait_ms = retry_after_ms(context.response)
        if wait_ms is None:
            return RetryVerdict.skip()
        return RetryVerdict.wait(wait_ms)


class ExponentialRetryStrategy(RetryStrategy):
    """
    Waits with exponential backoff after transient failures.

    Triggers on:
    - retryable transport errors that came without a response
    - 408 and 5xx responses, except 501 and 505

    Throttled responses that say how long to wait are left to the
    throttling strategies.
    """

    name = "exponentialRetryStrategy"

    def __init__(
        self,
        config: ExponentialRetryConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        super().__init__(logger)
        self.config = config or ExponentialRetryConfig()

    def _is_retryable_response(self, response: Response) -> bool:
        if retry_after_ms(response) is not None:
            return False
        status = response.status_code
        return status == 408 or (status >= 500 and status not in (501, 505))

    def retry(self, context: RetryContext) -> RetryVerdict:
        response = context.response
        error = context.error

        if response is not None:
            if self.config.ignore_status_codes or not self._is_retryable_response(response):
                return RetryVerdict.skip()
        elif error is not None:
            if self.config.ignore_transport_errors or not error.retryable:
                return RetryVerdict.skip()
        else:
            return RetryVerdict.skip()

        return RetryVerdict.wait(calculate_backoff(context.attempt_count, self.config))
