"""
Base transport interface.

A transport performs exactly one physical exchange per call. Retrying is
the retry policy's job, never the transport's.
"""

from abc import ABC, abstractmethod

from .models import Request, Response


class Transport(ABC):
    """Abstract base class for transports."""

    @abstractmethod
    async def send(self, request: Request) -> Response:
        """
        Send a request once.

        Args:
            request: Fully formed request

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If no usable exchange took place
        """
        ...
