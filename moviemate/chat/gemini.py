"""
Minimal client for Google's Generative Language API.
"""

from typing import Any, Optional

import httpx

from moviemate.chat.base import ChatProviderError
from moviemate.logging_config import get_logger

logger = get_logger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

DEFAULT_SYSTEM_PROMPT = (
    "You are MovieMate, a friendly and enthusiastic movie buddy who loves talking about films! "
    "Be conversational, use casual language, and show genuine excitement about movies. "
    "When someone says 'hi' or greets you, respond warmly and ask what they're in the mood for. "
    "Keep responses under 120 words, be specific with movie recommendations "
    "(title + year + why it's perfect), and use emojis occasionally to show personality. "
    "If they're not sure what they want, ask engaging questions like "
    "'What's your vibe tonight?' or 'Feeling adventurous or cozy?'"
)


class GeminiChatService:
    """
    Chat provider backed by Gemini generateContent.

    The API key travels as a query parameter and is never logged.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash-latest",
        system_prompt: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("GEMINI_API_KEY not set")
        self._api_key = api_key
        self.model = model
        self.system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_BASE_URL}/models/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "systemInstruction": {
                "role": "system",
                "parts": [{"text": self.system_prompt}],
            },
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                },
            ],
        }

    async def generate_reply(self, prompt: str) -> str:
        """
        Ask Gemini for a reply.

        Raises:
            ChatProviderError: transport failure, non-2xx status or no candidates
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=self.build_payload(prompt),
                )
            except httpx.HTTPError as exc:
                logger.warning("Gemini request failed: %s", type(exc).__name__)
                raise ChatProviderError(f"gemini request failed: {type(exc).__name__}") from exc

        if not resp.is_success:
            detail = _error_detail(resp)
            logger.warning("Gemini error", extra={"status": resp.status_code})
            raise ChatProviderError(f"gemini error status={resp.status_code} body={detail}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ChatProviderError("gemini returned invalid JSON") from exc
        return _first_candidate_text(data)


def _error_detail(resp: httpx.Response) -> Any:
    try:
        return resp.json().get("error")
    except (ValueError, AttributeError):
        return None


def _first_candidate_text(data: Any) -> str:
    """Pull the first candidate's first text part; anything unexpected is a provider error."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise ChatProviderError("no candidates returned")

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        raise ChatProviderError("gemini returned an unexpected response shape")

    text = parts[0].get("text")
    if not isinstance(text, str):
        raise ChatProviderError("gemini returned an unexpected response shape")
    # blank text counts as no reply
    if not text.strip():
        raise ChatProviderError("gemini returned an empty reply")
    return text
