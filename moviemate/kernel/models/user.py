"""
User model for identity management.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviemate.kernel.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from moviemate.kernel.models.movie import WatchlistItem


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(200),
        unique=True,
        index=True,
        nullable=False,
    )
    # bcrypt hash; the plaintext is never stored
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    watchlist: Mapped[List["WatchlistItem"]] = relationship(
        "WatchlistItem",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
