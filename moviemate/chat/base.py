"""
Chat provider interface.
"""

from typing import Protocol


class ChatProviderError(Exception):
    """The upstream chat provider failed or returned nothing usable."""


class ChatService(Protocol):
    """Anything that can turn a user prompt into a reply."""

    name: str

    async def generate_reply(self, prompt: str) -> str:
        ...
