"""
MovieMate backend: accounts, watchlists and a movie chatbot.
"""

__version__ = "1.0.0"
