"""
Credential failure taxonomy.

Each failure is terminal for the calling request. Messages are generic on
purpose; the specific cause of a token rejection is only written to the
internal log.
"""


class CredentialError(Exception):
    """Base class for password and token failures."""


class HashingFailure(CredentialError):
    """The hashing primitive could not produce a hash (entropy or resources)."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)


class MismatchFailure(CredentialError):
    """Password does not match, or the stored hash is unusable."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class SigningFailure(CredentialError):
    """The signing primitive refused to produce a token."""

    def __init__(self, message: str = "Token signing failed"):
        super().__init__(message)


class InvalidTokenFailure(CredentialError):
    """Token is malformed, forged, signed with another algorithm, or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
