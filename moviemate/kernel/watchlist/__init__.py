"""
Watchlist Core - per-user saved movies and the local movie catalogue.
"""

from moviemate.kernel.watchlist.watchlist_service import WatchlistService

__all__ = ["WatchlistService"]
