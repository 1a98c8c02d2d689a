"""
Movie catalogue and watchlist models.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviemate.kernel.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from moviemate.kernel.models.user import User


class Movie(Base, TimestampMixin):
    """Locally curated movie entry."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(
        String(300),
        unique=True,
        index=True,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    genres: Mapped[str] = mapped_column(String(200), default="", nullable=False)  # CSV

    @property
    def genre_list(self) -> list[str]:
        return [g.strip() for g in self.genres.split(",") if g.strip()]

    def __repr__(self) -> str:
        return f"<Movie {self.title}>"


class WatchlistItem(Base):
    """
    A movie saved by a user.

    movie_id is the external (TMDB) id the frontend resolves details from,
    not a foreign key into movies.
    """

    __tablename__ = "watchlist_items"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_watchlist_user_movie"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="watchlist")
