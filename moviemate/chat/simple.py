"""
Fallback chat provider used when no AI provider is configured.
"""

SIMPLE_REPLY = "Tell me what kind of movies you like, and I'll suggest some!"


class SimpleChatService:
    name = "simple"

    async def generate_reply(self, prompt: str) -> str:
        return SIMPLE_REPLY
