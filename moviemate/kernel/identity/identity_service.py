"""
Identity service for user account operations.

Persists users and their password hashes, and asks the CredentialService for
verdicts and tokens. Hashing runs in a worker thread so concurrent logins
do not block the event loop.
"""

import asyncio
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.errors import MismatchFailure
from moviemate.kernel.identity.jwt import Identity
from moviemate.kernel.models.user import User
from moviemate.logging_config import get_logger

logger = get_logger(__name__)


def identity_for(user: User) -> Identity:
    return Identity(user_id=user.id, username=user.username, email=user.email)


class IdentityService:
    """
    Service for user identity operations.

    Handles registration, authentication and user lookup.
    """

    def __init__(self, session: AsyncSession, credentials: CredentialService):
        self.session = session
        self.credentials = credentials

    async def register_user(
        self,
        username: str,
        email: str,
        password: str,
    ) -> tuple[User, str]:
        """
        Register a new user and issue their first token.

        Args:
            username: Unique display name
            email: Unique email address
            password: Plain text password

        Returns:
            Tuple of (User, token)

        Raises:
            ValueError: If username or email already exists
        """
        username = username.strip()
        email = email.lower().strip()

        if await self.get_user_by_username(username):
            raise ValueError("Username already exists")
        if await self.get_user_by_email(email):
            raise ValueError("Email already exists")

        password_hash = await asyncio.to_thread(self.credentials.hash_password, password)
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        await self.session.flush()  # Get the ID
        await self.session.refresh(user)

        token = self.credentials.issue_token(identity_for(user))
        logger.info("User registered", extra={"user_id": user.id})
        return user, token

    async def authenticate(self, username: str, password: str) -> tuple[User, str]:
        """
        Check a username/password pair and issue a token.

        Raises:
            MismatchFailure: unknown user or wrong password, indistinguishably
        """
        user = await self.get_user_by_username(username.strip())
        if not user:
            logger.info("Login failed", extra={"reason": "unknown_user"})
            raise MismatchFailure()

        try:
            await asyncio.to_thread(
                self.credentials.check_password, password, user.password_hash
            )
        except MismatchFailure:
            logger.info("Login failed", extra={"reason": "password_mismatch", "user_id": user.id})
            raise

        if self.credentials.hasher.needs_rehash(user.password_hash):
            user.password_hash = await asyncio.to_thread(self.credentials.hash_password, password)
            logger.info("Password hash upgraded", extra={"user_id": user.id})

        token = self.credentials.issue_token(identity_for(user))
        return user, token

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return await self.session.get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email."""
        query = select(User).where(User.email == email.lower().strip())
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
