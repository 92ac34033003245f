"""
Client Load Balancing - Transports.

Single-shot request senders the retry policy drives.
"""

from .models import Request, Response
from .base import Transport
from .httpx_transport import HttpxTransport

__all__ = [
    "Request",
    "Response",
    "Transport",
    "HttpxTransport",
]
