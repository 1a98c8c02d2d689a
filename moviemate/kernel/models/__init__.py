"""
Kernel Data Models

SQLAlchemy models for users, movies and watchlists.
"""

from moviemate.kernel.models.base import Base, TimestampMixin
from moviemate.kernel.models.user import User
from moviemate.kernel.models.movie import Movie, WatchlistItem

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Movie",
    "WatchlistItem",
]
