"""
Chat messages sent in a completions request body.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping


class Role(str, Enum):
    """Message roles in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One conversation turn; `name` optionally labels the participant."""

    role: Role
    content: str
    name: str | None = None

    def to_dict(self) -> dict:
        payload = {"role": Role(self.role).value, "content": self.content}
        if self.name:
            payload["name"] = self.name
        return payload

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str, name: str | None = None) -> "Message":
        return cls(Role.USER, content, name)


def to_payload(messages: Iterable["Message | Mapping[str, str]"]) -> list[dict]:
    """Serialize messages, passing through ones already in wire format."""
    payload = []
    for message in messages:
        if isinstance(message, Message):
            payload.append(message.to_dict())
        elif "role" in message and "content" in message:
            payload.append(dict(message))
        else:
            raise ValueError(f"Message needs 'role' and 'content': {message!r}")
    return payload
