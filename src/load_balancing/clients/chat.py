"""
Chat completions client that fails over between deployments.

Requests go to the first endpoint; a throttled attempt is redirected to the
next endpoint in the list, and transient failures are retried with
exponential backoff.
"""

import asyncio
import logging
from typing import Any, Mapping, Sequence

from .messages import Message, to_payload
from ..exceptions import (
    AuthenticationError,
    RateLimitError,
    ResponseError,
    ServerError,
)
from ..retry import (
    EndpointRotator,
    ExponentialRetryConfig,
    RetryPolicy,
    is_throttled,
    load_balanced_retry_policy,
    retry_after_ms,
)
from ..transport import HttpxTransport, Request, Response, Transport

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-02-01"


class LoadBalancedChatClient:
    """
    Client for chat completion deployments behind several endpoints.

    Features:
    - Round-robin failover on throttling (429/503)
    - Exponential backoff with jitter on transient failures
    - Cancellation through an `asyncio.Event`
    """

    def __init__(
        self,
        endpoints: Sequence[str],
        deployment_id: str,
        *,
        headers: Mapping[str, str] | None = None,
        api_version: str = DEFAULT_API_VERSION,
        max_retries: int = 3,
        backoff: ExponentialRetryConfig | None = None,
        transport: Transport | None = None,
        policy: RetryPolicy | None = None,
    ):
        """
        Initialize the client.

        Args:
            endpoints: Base URLs of the deployments, primary first
            deployment_id: Deployment to call on every endpoint
            headers: Extra headers sent with each request (e.g. credentials)
            api_version: Value of the api-version query parameter
            max_retries: Retries allowed after the initial attempt
            backoff: Exponential backoff configuration
            transport: Transport to send through (default: HttpxTransport)
            policy: Fully built policy, overriding endpoints-based defaults
        """
        rotator = EndpointRotator(endpoints)
        self.policy = policy or load_balanced_retry_policy(
            rotator.endpoints, max_retries, backoff=backoff
        )
        self.endpoint = rotator.endpoints[0]
        self.deployment_id = deployment_id
        self.headers = dict(headers or {})
        self.api_version = api_version
        self.transport = transport or HttpxTransport()

    def _completions_url(self) -> str:
        return (
            f"{self.endpoint}/openai/deployments/{self.deployment_id}"
            f"/chat/completions?api-version={self.api_version}"
        )

    def _handle_error(self, response: Response) -> None:
        """Convert a final non-success response to a domain exception."""
        status = response.status_code
        if is_throttled(response):
            raise RateLimitError(
                "Rate limit exceeded on every endpoint",
                retry_after_ms=retry_after_ms(response),
                response=response,
            )
        if status in (401, 403):
            raise AuthenticationError("Credentials rejected", response=response)
        if status >= 500:
            raise ServerError(f"Server error: {response.text}", response=response)
        raise ResponseError(f"Request failed: {response.text}", response=response)

    async def get_chat_completions(
        self,
        messages: Sequence[Message | dict],
        max_tokens: int = 150,
        abort_signal: asyncio.Event | None = None,
        **params: Any,
    ) -> dict:
        """
        Request chat completions.

        Args:
            messages: Conversation so far
            max_tokens: Maximum tokens to generate
            abort_signal: Event that cancels the request when set
            **params: Extra body parameters (temperature, etc.)

        Returns:
            Decoded JSON response body
        """
        payload = {
            "messages": to_payload(messages),
            "max_tokens": max_tokens,
            **params,
        }
        request = Request.post_json(
            self._completions_url(),
            payload,
            headers=self.headers,
            abort_signal=abort_signal,
        )

        response = await self.policy.execute(request, self.transport)
        if not response.is_success:
            self._handle_error(response)

        logger.info(f"Chat completion served by {request.url}")
        return response.json()

    async def complete(self, prompt: str, max_tokens: int = 150) -> str:
        """Send a single user prompt and return the choices joined by newlines."""
        data = await self.get_chat_completions([Message.user(prompt)], max_tokens)
        return "\n".join(
            choice["message"]["content"] or "" for choice in data.get("choices", [])
        )

    async def aclose(self) -> None:
        if isinstance(self.transport, HttpxTransport):
            await self.transport.aclose()

    async def __aenter__(self) -> "LoadBalancedChatClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
