"""
Identity Core - password hashing, session tokens and user accounts.
"""

from moviemate.kernel.identity.errors import (
    CredentialError,
    HashingFailure,
    InvalidTokenFailure,
    MismatchFailure,
    SigningFailure,
)
from moviemate.kernel.identity.password import PasswordHasher
from moviemate.kernel.identity.jwt import Identity, JWTManager, TokenClaims
from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.identity_service import IdentityService

__all__ = [
    "CredentialError",
    "HashingFailure",
    "InvalidTokenFailure",
    "MismatchFailure",
    "SigningFailure",
    "PasswordHasher",
    "Identity",
    "JWTManager",
    "TokenClaims",
    "CredentialService",
    "IdentityService",
]
