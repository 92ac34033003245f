"""
Transport adapter backed by httpx.
"""

import logging

import httpx

from .base import Transport
from .models import Request, Response
from ..exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """
    Sends requests through an `httpx.AsyncClient`.

    Features:
    - Every HTTP status is returned as a Response, throttling included
    - Connection failures and timeouts become retryable TransportErrors
    - Reuses a caller-supplied client, or owns and closes its own
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
    ):
        """
        Initialize the transport.

        Args:
            client: Existing client to reuse (not closed by this transport)
            timeout: Request timeout in seconds for a client created here
        """
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.timeout = timeout

    async def send(self, request: Request) -> Response:
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            logger.debug(f"Timeout sending {request.method} {request.url}: {e}")
            raise TransportError(
                f"Request to {request.url} timed out",
                request=request,
            ) from e
        except httpx.TransportError as e:
            logger.debug(f"Transport failure sending {request.method} {request.url}: {e}")
            raise TransportError(
                f"Failed to reach {request.url}: {e}",
                request=request,
            ) from e

        return Response(
            status_code=response.status_code,
            headers=response.headers,
            body=response.content,
            request=request,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
