"""
Pytest fixtures for MovieMate tests.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from moviemate.config import Settings
from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.jwt import Identity
from moviemate.kernel.identity.password import PasswordHasher
from moviemate.main import create_app

TEST_SIGNING_KEY = "test-secret-key-for-testing-only"
OTHER_SIGNING_KEY = "another-secret-key-nobody-trusts"

# Cheap work factor keeps the suite fast; production uses BCRYPT_ROUNDS
TEST_BCRYPT_ROUNDS = 4


class FrozenClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class StubChatService:
    name = "stub"

    def __init__(self, reply: str = "Try Heat (1995).", error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate_reply(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


def tamper_signature(token: str) -> str:
    """Change the first character of the signature segment."""
    header, payload, signature = token.split(".")
    first = "A" if signature[0] != "A" else "B"
    return ".".join([header, payload, first + signature[1:]])


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def credentials(hasher: PasswordHasher, clock: FrozenClock) -> CredentialService:
    """Credential service with a fast hasher and a controllable clock."""
    return CredentialService(TEST_SIGNING_KEY, hasher=hasher, clock=clock)


@pytest.fixture
def alice() -> Identity:
    return Identity(user_id=42, username="alice", email="alice@example.com")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SIGNING_KEY,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'moviemate-test.db'}",
        environment="test",
        rate_limit_enabled=False,
    )


@pytest.fixture
def chat_service() -> StubChatService:
    return StubChatService()


@pytest.fixture
def app(settings: Settings, credentials: CredentialService, chat_service: StubChatService) -> FastAPI:
    return create_app(settings, credentials=credentials, chat_service=chat_service)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async client against a fresh SQLite database."""
    database = app.state.database
    await database.init()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        await database.close()


async def register(client: AsyncClient, username: str = "alice", password: str = "Sup3rSecret!") -> dict:
    response = await client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
