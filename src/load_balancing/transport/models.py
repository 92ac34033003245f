"""
Request and response types passed between the retry policy and a transport.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx


def _to_headers(headers: Mapping[str, str] | httpx.Headers | None) -> httpx.Headers:
    if isinstance(headers, httpx.Headers):
        return headers
    return httpx.Headers(headers or {})


@dataclass
class Request:
    """
    An outgoing request.

    Only `url` is rewritten between attempts (on redirect); everything else
    stays as the caller built it.

    Attributes:
        method: HTTP method
        url: Absolute target URL
        headers: Case-insensitive header mapping
        body: Optional raw request body
        abort_signal: Event the caller sets to cancel the logical request
    """

    method: str
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes | None = None
    abort_signal: asyncio.Event | None = None

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = _to_headers(self.headers)

    @property
    def aborted(self) -> bool:
        return self.abort_signal is not None and self.abort_signal.is_set()

    @classmethod
    def post_json(
        cls,
        url: str,
        payload: Any,
        headers: Mapping[str, str] | None = None,
        abort_signal: asyncio.Event | None = None,
    ) -> "Request":
        """Create a POST request with a JSON body."""
        merged = _to_headers(headers).copy()
        merged.setdefault("Content-Type", "application/json")
        return cls(
            method="POST",
            url=url,
            headers=merged,
            body=json.dumps(payload).encode("utf-8"),
            abort_signal=abort_signal,
        )


@dataclass(frozen=True)
class Response:
    """An immutable response produced by one attempt."""

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""
    request: Request | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _to_headers(self.headers))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)
