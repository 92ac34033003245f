"""Shared stubs for retry policy tests."""

import pytest

from load_balancing.exceptions import TransportError
from load_balancing.retry import DelayScheduler, RetryContext, RetryStrategy, RetryVerdict
from load_balancing.transport import Request, Response, Transport


def create_response(
    status_code: int,
    headers: dict | None = None,
    body: bytes = b"",
    request: Request | None = None,
) -> Response:
    """Create a response with a request attached."""
    return Response(
        status_code=status_code,
        headers=headers or {},
        body=body,
        request=request or Request("POST", "https://primary.example.com/v1/chat?x=1"),
    )


class ScriptedTransport(Transport):
    """Replays a list of outcomes; each entry is a status code, a Response or an exception."""

    def __init__(self, outcomes: list, repeat_last: bool = True):
        self.outcomes = list(outcomes)
        self.repeat_last = repeat_last
        self.sent_urls: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.sent_urls)

    async def send(self, request: Request) -> Response:
        self.sent_urls.append(request.url)
        index = len(self.sent_urls) - 1
        if index >= len(self.outcomes):
            index = len(self.outcomes) - 1
        outcome = self.outcomes[index]

        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, Response):
            return Response(outcome.status_code, outcome.headers, outcome.body, request)
        return Response(status_code=outcome, request=request)


class BareTransport(Transport):
    """Replays outcomes without attaching the request; None means no outcome at all."""

    def __init__(self, outcomes: list):
        self.outcomes = list(outcomes)
        self.sent_urls: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.sent_urls)

    async def send(self, request: Request) -> Response | None:
        self.sent_urls.append(request.url)
        outcome = self.outcomes[min(self.calls, len(self.outcomes)) - 1]
        if outcome is None:
            return None
        return Response(status_code=outcome)


class FirstAttemptThrottledTransport(Transport):
    """Answers the first attempt with a 429 and forwards later attempts."""

    def __init__(self, inner: Transport, retry_after_ms: int = 1000):
        self.inner = inner
        self.retry_after_ms = retry_after_ms
        self.calls = 0

    async def send(self, request: Request) -> Response:
        self.calls += 1
        if self.calls == 1:
            return Response(
                status_code=429,
                headers={
                    "Content-Type": "text/plain",
                    "retry-after-ms": str(self.retry_after_ms),
                },
                body=b"Too Many Requests",
                request=request,
            )
        return await self.inner.send(request)


class RecordingScheduler(DelayScheduler):
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.delays: list[float] = []

    async def wait(self, delay_ms, abort_signal=None):
        self.delays.append(delay_ms)


class FixedVerdictStrategy(RetryStrategy):
    """Returns the same verdict after every attempt and counts calls."""

    name = "fixedVerdictStrategy"

    def __init__(self, verdict: RetryVerdict):
        super().__init__()
        self.verdict = verdict
        self.contexts: list[RetryContext] = []

    def retry(self, context: RetryContext) -> RetryVerdict:
        self.contexts.append(
            RetryContext(
                context.attempt_count, context.response, context.error, context.request
            )
        )
        return self.verdict


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def connect_error():
    return TransportError("Connection refused")
