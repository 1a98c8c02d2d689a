"""
Pydantic schemas for API request/response validation.
"""

from moviemate.schemas.auth import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from moviemate.schemas.chat import ChatRequest, ChatResponse
from moviemate.schemas.common import ErrorResponse, HealthResponse, SuccessResponse
from moviemate.schemas.watchlist import (
    MovieCreate,
    MovieResponse,
    WatchlistListResponse,
    WatchlistRequest,
)

__all__ = [
    # Auth
    "AuthResponse",
    "ProfileResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    # Chat
    "ChatRequest",
    "ChatResponse",
    # Watchlist
    "MovieCreate",
    "MovieResponse",
    "WatchlistListResponse",
    "WatchlistRequest",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "SuccessResponse",
]
