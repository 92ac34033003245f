"""
Client Load Balancing - Clients.

Clients that send through the retry policy.
"""

from .messages import Message, Role, to_payload
from .chat import LoadBalancedChatClient

__all__ = [
    "Message",
    "Role",
    "to_payload",
    "LoadBalancedChatClient",
]
