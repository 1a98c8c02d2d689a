"""
Watchlist and movie catalogue operations.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from moviemate.kernel.models.movie import Movie, WatchlistItem
from moviemate.logging_config import get_logger

logger = get_logger(__name__)


class WatchlistService:
    """Service for a user's saved movies."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user_id: int, movie_id: int) -> bool:
        """
        Save a movie to the user's watchlist.

        Returns:
            True if a row was created, False if the movie was already saved
        """
        if await self._get_item(user_id, movie_id):
            return False
        self.session.add(WatchlistItem(user_id=user_id, movie_id=movie_id))
        await self.session.flush()
        logger.info("Watchlist item added", extra={"user_id": user_id, "movie_id": movie_id})
        return True

    async def remove(self, user_id: int, movie_id: int) -> bool:
        """
        Remove a movie from the user's watchlist.

        Returns:
            True if a row was deleted. Removing an absent movie is not an error.
        """
        result = await self.session.execute(
            delete(WatchlistItem).where(
                WatchlistItem.user_id == user_id,
                WatchlistItem.movie_id == movie_id,
            )
        )
        return (result.rowcount or 0) > 0

    async def list_movie_ids(self, user_id: int) -> List[int]:
        """External movie ids on the user's watchlist, oldest first."""
        query = (
            select(WatchlistItem.movie_id)
            .where(WatchlistItem.user_id == user_id)
            .order_by(WatchlistItem.added_at, WatchlistItem.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _get_item(self, user_id: int, movie_id: int) -> Optional[WatchlistItem]:
        query = select(WatchlistItem).where(
            WatchlistItem.user_id == user_id,
            WatchlistItem.movie_id == movie_id,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    # Catalogue

    async def create_movie(
        self,
        title: str,
        description: str = "",
        year: Optional[int] = None,
        genres: Optional[List[str]] = None,
    ) -> Movie:
        """
        Add a movie to the local catalogue.

        Raises:
            ValueError: If a movie with the same title exists
        """
        title = title.strip()
        existing = await self.session.execute(select(Movie).where(Movie.title == title))
        if existing.scalar_one_or_none():
            raise ValueError("Movie title already exists")

        movie = Movie(
            title=title,
            description=description,
            year=year,
            genres=",".join(g.strip() for g in (genres or []) if g.strip()),
        )
        self.session.add(movie)
        await self.session.flush()
        await self.session.refresh(movie)
        return movie

    async def get_movie(self, movie_id: int) -> Optional[Movie]:
        return await self.session.get(Movie, movie_id)

    async def list_movies(self, limit: int = 20, offset: int = 0) -> List[Movie]:
        """Newest catalogue entries first."""
        query = (
            select(Movie)
            .order_by(Movie.created_at.desc(), Movie.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
