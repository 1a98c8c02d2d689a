"""
Watchlist and movie catalogue schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WatchlistRequest(BaseModel):
    """Add/remove request; movie_id is the external (TMDB) id."""

    movie_id: int = Field(..., gt=0)


class WatchlistListResponse(BaseModel):
    items: List[int]
    count: int


class MovieCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    year: Optional[int] = Field(None, ge=1870, le=2200)
    genres: List[str] = []


class MovieResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    year: Optional[int] = None
    genres: List[str] = Field(default_factory=list, validation_alias="genre_list")
