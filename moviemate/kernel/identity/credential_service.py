"""
Credential service: the single authority on passwords and session tokens.

Knows nothing about HTTP or storage. Callers hand in plaintext passwords,
stored hashes and token strings and get back a verdict or a signed token.
"""

from typing import Optional

from moviemate.kernel.identity.errors import InvalidTokenFailure, MismatchFailure
from moviemate.kernel.identity.jwt import Clock, Identity, JWTManager, TokenClaims
from moviemate.kernel.identity.password import PasswordHasher

BEARER_PREFIX = "bearer "


def strip_bearer(token: str) -> str:
    """Remove an optional 'Bearer ' prefix (case-insensitive)."""
    token = token.strip()
    if token[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        return token[len(BEARER_PREFIX):].strip()
    return token


class CredentialService:
    """
    Hash and check passwords, issue and validate identity tokens.

    Immutable after construction and safe to share across concurrent
    requests. hash_password and check_password are deliberately slow and
    block; async callers should run them in a worker thread.
    """

    def __init__(
        self,
        signing_key: str,
        *,
        hasher: Optional[PasswordHasher] = None,
        clock: Optional[Clock] = None,
    ):
        self._hasher = hasher or PasswordHasher()
        self._tokens = JWTManager(signing_key, clock=clock)

    def __repr__(self) -> str:
        return f"<CredentialService algorithm={self._tokens.algorithm}>"

    @property
    def hasher(self) -> PasswordHasher:
        return self._hasher

    def hash_password(self, plaintext: str) -> str:
        """Return a freshly salted hash of the password."""
        return self._hasher.hash(plaintext)

    def check_password(self, plaintext: str, stored_hash: str) -> None:
        """
        Raise MismatchFailure unless the password matches the stored hash.

        Malformed hashes fail the same way as wrong passwords.
        """
        if not self._hasher.verify(plaintext, stored_hash):
            raise MismatchFailure()

    def issue_token(self, identity: Identity) -> str:
        """Sign a token for the identity, valid for seven days."""
        token, _ = self._tokens.create_token(identity)
        return token

    def issue_token_with_claims(self, identity: Identity) -> tuple[str, TokenClaims]:
        """Same as issue_token, also returning the signed claims."""
        return self._tokens.create_token(identity)

    def validate_token(self, token: str) -> Identity:
        """
        Return the identity carried by a currently valid token.

        Accepts the raw token or an 'Authorization' header value with the
        'Bearer ' prefix still attached.
        """
        if not isinstance(token, str) or not token.strip():
            raise InvalidTokenFailure()
        claims = self._tokens.verify_token(strip_bearer(token))
        return Identity(
            user_id=claims.user_id,
            username=claims.username,
            email=claims.email,
        )

