"""
Kernel Layer

- Identity Core (password hashing, session tokens, user accounts)
- Watchlist Core (per-user saved movies, movie catalogue)
- Data models shared by both

The credential service never touches the database; IdentityService is the
collaborator that persists hashes and supplies identities for tokens.
"""
