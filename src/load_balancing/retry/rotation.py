"""
Round-robin endpoint selection.

Retry N (1-based) is sent to ``endpoints[((N - 1) % len(endpoints)) + 1]``.
The ``+ 1`` skips the primary endpoint on the first retry so a failing
backend is never hit again straight away. That index runs one past the end
of the list once per cycle; it is wrapped back to 0 explicitly rather than
left to chance. With ``[A, B]`` the retries alternate B, A, B, ...; with a
single endpoint every retry goes to A.
"""

import logging
from typing import Sequence

import httpx

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _validate_endpoints(endpoints: Sequence[str]) -> tuple[str, ...]:
    if isinstance(endpoints, str) or not endpoints:
        raise ConfigurationError("At least one endpoint is required")

    validated = []
    for endpoint in endpoints:
        try:
            url = httpx.URL(endpoint)
        except (httpx.InvalidURL, TypeError) as e:
            raise ConfigurationError(f"Invalid endpoint {endpoint!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(
                f"Endpoint must be an absolute http(s) URL, got {endpoint!r}"
            )
        validated.append(str(endpoint).rstrip("/"))
    return tuple(validated)


class EndpointRotator:
    """
    Picks the base URL for each retry and rewrites request URLs onto it.

    Attributes:
        endpoints: Ordered, read-only base URLs (primary first)
    """

    def __init__(self, endpoints: Sequence[str]):
        self.endpoints = _validate_endpoints(endpoints)

    def __len__(self) -> int:
        return len(self.endpoints)

    def next_endpoint(self, attempt_count: int) -> str | None:
        """
        Select the endpoint for a retry.

        Args:
            attempt_count: 1-based number of the retry about to be sent;
                0 stands for the initial attempt

        Returns:
            The base URL, or None for the initial attempt (no rotation)
        """
        if attempt_count < 0:
            raise ValueError(f"attempt_count must be >= 0, got {attempt_count}")
        if attempt_count == 0:
            return None

        index = ((attempt_count - 1) % len(self.endpoints)) + 1
        if index >= len(self.endpoints):
            logger.debug(
                f"Endpoint index {index} out of range for {len(self.endpoints)} "
                f"endpoints, wrapping to {index % len(self.endpoints)}"
            )
            index %= len(self.endpoints)
        return self.endpoints[index]

    def redirect_url(self, url: str, attempt_count: int) -> str:
        """
        Move a URL onto the endpoint chosen for a retry.

        Path and query string are preserved; only the base URL changes.
        """
        endpoint = self.next_endpoint(attempt_count)
        if endpoint is None:
            return url
        path_and_query = httpx.URL(url).raw_path.decode("ascii")
        return endpoint + path_and_query


def next_endpoint(endpoints: Sequence[str], attempt_count: int) -> str | None:
    """Select the endpoint for a retry from a plain list of base URLs."""
    return EndpointRotator(endpoints).next_endpoint(attempt_count)
