"""
FastAPI dependencies for authentication, services and database sessions.
"""

from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from moviemate.chat.base import ChatService
from moviemate.config import Settings
from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.errors import InvalidTokenFailure
from moviemate.kernel.identity.identity_service import IdentityService
from moviemate.kernel.identity.jwt import Identity
from moviemate.kernel.watchlist.watchlist_service import WatchlistService

# Raw header value; the credential service accepts it with or without "Bearer "
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a session, committing on success."""
    async with request.app.state.database.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Credentials = Annotated[CredentialService, Depends(get_credentials)]
ChatProvider = Annotated[ChatService, Depends(get_chat_service)]


def get_identity_service(db: DbSession, credentials: Credentials) -> IdentityService:
    return IdentityService(db, credentials)


def get_watchlist_service(db: DbSession) -> WatchlistService:
    return WatchlistService(db)


Identities = Annotated[IdentityService, Depends(get_identity_service)]
Watchlists = Annotated[WatchlistService, Depends(get_watchlist_service)]


async def get_current_identity(
    request: Request,
    authorization: Annotated[Optional[str], Depends(authorization_header)],
    credentials: Credentials,
) -> Identity:
    """Validate the Authorization header and attach the identity to request state."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = credentials.validate_token(authorization)
    except InvalidTokenFailure:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.user_id = identity.user_id
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_client_ip(request: Request) -> Optional[str]:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None
