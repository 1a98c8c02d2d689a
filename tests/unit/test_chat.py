"""Unit tests for chat providers."""

import json

import httpx
import pytest

from moviemate.chat import build_chat_service
from moviemate.chat.base import ChatProviderError
from moviemate.chat.gemini import DEFAULT_SYSTEM_PROMPT, GeminiChatService
from moviemate.chat.simple import SIMPLE_REPLY, SimpleChatService
from moviemate.config import Settings


def _gemini(handler, **kwargs) -> GeminiChatService:
    return GeminiChatService(
        api_key="test-key",
        model="gemini-test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _candidates(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiChatService:

    @pytest.mark.asyncio
    async def test_successful_reply(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_candidates("Watch Arrival (2016)!"))

        reply = await _gemini(handler).generate_reply("something thoughtful")

        assert reply == "Watch Arrival (2016)!"
        assert seen["url"].path == "/v1beta/models/gemini-test:generateContent"
        assert seen["url"].params["key"] == "test-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "something thoughtful"
        assert seen["body"]["systemInstruction"]["parts"][0]["text"] == DEFAULT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_custom_system_prompt(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_candidates("ok"))

        await _gemini(handler, system_prompt="Only talk about noir.").generate_reply("hi")

        assert seen["body"]["systemInstruction"]["parts"][0]["text"] == "Only talk about noir."

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"message": "API key invalid"}})

        with pytest.raises(ChatProviderError) as exc:
            await _gemini(handler).generate_reply("hi")

        assert "status=403" in str(exc.value)
        assert "test-key" not in str(exc.value)

    @pytest.mark.asyncio
    async def test_no_candidates_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        with pytest.raises(ChatProviderError):
            await _gemini(handler).generate_reply("hi")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"candidates": {"a": 1}},
            {"candidates": [{"content": "text"}]},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
            {"candidates": [{"content": {"parts": "text"}}]},
            {"candidates": ["text"]},
            ["not", "an", "object"],
        ],
    )
    async def test_unexpected_shape_raises(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with pytest.raises(ChatProviderError):
            await _gemini(handler).generate_reply("hi")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   "])
    async def test_blank_reply_raises(self, text):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_candidates(text))

        with pytest.raises(ChatProviderError):
            await _gemini(handler).generate_reply("hi")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ChatProviderError):
            await _gemini(handler).generate_reply("hi")

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiChatService(api_key="")


class TestProviderSelection:

    def test_simple_when_no_key(self):
        settings = Settings(_env_file=None, jwt_secret="dev", gemini_api_key="")

        assert isinstance(build_chat_service(settings), SimpleChatService)

    def test_gemini_when_key_configured(self):
        settings = Settings(_env_file=None, jwt_secret="dev", gemini_api_key="abc", gemini_model="gemini-x")
        service = build_chat_service(settings)

        assert isinstance(service, GeminiChatService)
        assert service.model == "gemini-x"

    @pytest.mark.asyncio
    async def test_simple_reply(self):
        assert await SimpleChatService().generate_reply("anything") == SIMPLE_REPLY
