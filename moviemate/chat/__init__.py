"""
Movie chatbot providers.
"""

from moviemate.chat.base import ChatProviderError, ChatService
from moviemate.chat.gemini import GeminiChatService
from moviemate.chat.simple import SimpleChatService
from moviemate.config import Settings


def build_chat_service(settings: Settings) -> ChatService:
    """Gemini when an API key is configured, canned replies otherwise."""
    if settings.gemini_configured:
        return GeminiChatService(
            api_key=settings.gemini_api_key.strip(),
            model=settings.gemini_model,
            system_prompt=settings.gemini_system_prompt,
            timeout=settings.gemini_timeout_seconds,
        )
    return SimpleChatService()


__all__ = [
    "ChatProviderError",
    "ChatService",
    "GeminiChatService",
    "SimpleChatService",
    "build_chat_service",
]
