"""
Movie chatbot endpoint.
"""

from fastapi import APIRouter, HTTPException, status

from moviemate.api.deps import AppSettings, ChatProvider
from moviemate.chat.base import ChatProviderError
from moviemate.logging_config import get_logger
from moviemate.schemas.chat import ChatRequest, ChatResponse

logger = get_logger(__name__)
router = APIRouter()

FALLBACK_REPLY = (
    "Hey there! \U0001F3AC I'm having a small technical hiccup, but I'm still here to help! "
    "What kind of movies are you in the mood for? Action? Comedy? Romance? "
    "Just tell me what you're feeling!"
)


@router.post("/chat", response_model=ChatResponse)
async def chat(data: ChatRequest, chat_service: ChatProvider, settings: AppSettings):
    """
    Reply to a chat message.

    Provider failures degrade to a friendly canned reply unless CHAT_DEBUG is on.
    """
    try:
        reply = await chat_service.generate_reply(data.message)
    except ChatProviderError as exc:
        logger.error("Chat generation failed: %s", exc, extra={"provider": chat_service.name})
        if settings.chat_debug:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
        return ChatResponse(reply=FALLBACK_REPLY)
    return ChatResponse(reply=reply)
