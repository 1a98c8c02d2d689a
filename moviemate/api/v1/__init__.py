"""
API routes.
"""

from fastapi import APIRouter

from moviemate.api.v1 import auth, chat, watchlist

router = APIRouter()

router.include_router(auth.router, tags=["Authentication"])
router.include_router(watchlist.router, tags=["Watchlist"])
router.include_router(chat.router, tags=["Chat"])
