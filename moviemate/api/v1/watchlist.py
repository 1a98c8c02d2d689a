"""
Watchlist and movie catalogue endpoints. All routes require a bearer token.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from moviemate.api.deps import CurrentIdentity, Watchlists
from moviemate.schemas.common import SuccessResponse
from moviemate.schemas.watchlist import (
    MovieCreate,
    MovieResponse,
    WatchlistListResponse,
    WatchlistRequest,
)

router = APIRouter()


@router.post("/watchlist", response_model=SuccessResponse)
async def add_to_watchlist(data: WatchlistRequest, identity: CurrentIdentity, watchlists: Watchlists):
    await watchlists.add(identity.user_id, data.movie_id)
    return SuccessResponse(message="Added to watchlist successfully")


@router.delete("/watchlist", response_model=SuccessResponse)
async def remove_from_watchlist(data: WatchlistRequest, identity: CurrentIdentity, watchlists: Watchlists):
    await watchlists.remove(identity.user_id, data.movie_id)
    return SuccessResponse(message="Removed from watchlist successfully")


@router.get("/watchlist", response_model=WatchlistListResponse)
async def get_watchlist(identity: CurrentIdentity, watchlists: Watchlists):
    """Return external movie ids; the frontend fetches details itself."""
    ids = await watchlists.list_movie_ids(identity.user_id)
    return WatchlistListResponse(items=ids, count=len(ids))


@router.get("/movies", response_model=List[MovieResponse])
async def list_movies(
    identity: CurrentIdentity,
    watchlists: Watchlists,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    movies = await watchlists.list_movies(limit=limit, offset=offset)
    return [MovieResponse.model_validate(m) for m in movies]


@router.post("/movies", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(data: MovieCreate, identity: CurrentIdentity, watchlists: Watchlists):
    try:
        movie = await watchlists.create_movie(
            title=data.title,
            description=data.description,
            year=data.year,
            genres=data.genres,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return MovieResponse.model_validate(movie)


@router.get("/movies/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: int, identity: CurrentIdentity, watchlists: Watchlists):
    movie = await watchlists.get_movie(movie_id)
    if not movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return MovieResponse.model_validate(movie)
