"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from moviemate.kernel.identity.errors import HashingFailure
from moviemate.logging_config import get_logger

logger = get_logger(__name__)

# Number of rounds for bcrypt hashing (12 is secure default)
BCRYPT_ROUNDS = 12

# bcrypt only uses the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    Salted one-way password hashing.

    The work factor is fixed per instance. Tests may lower it; the
    application always uses BCRYPT_ROUNDS.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        """Encode and truncate to bcrypt's input limit."""
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt with a fresh salt.

        Args:
            password: Plain text password, must not be empty

        Returns:
            Hashed password string ($2b$...)

        Raises:
            ValueError: If the password is empty
            HashingFailure: If salt generation or hashing fails
        """
        if not password:
            raise ValueError("Password must not be empty")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(self._encode(password), salt)
        except (OSError, MemoryError) as exc:
            logger.error("Password hashing failed", extra={"reason": type(exc).__name__})
            raise HashingFailure() from exc
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        A malformed hash is reported as a mismatch, same as a wrong password.
        """
        try:
            return bcrypt.checkpw(
                self._encode(plain_password),
                hashed_password.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            logger.debug("Stored password hash is not usable", extra={"reason": "malformed_hash"})
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """
        Check if a password hash was produced with a different work factor.

        bcrypt hashes encode the rounds in the second field: $2b$XX$...
        """
        parts = hashed_password.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self.rounds
