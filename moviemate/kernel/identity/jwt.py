"""
JWT token management for authentication.

Tokens are stateless: validity depends only on the HS256 signature and the
embedded expiry compared against the manager's clock.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, NoReturn, Optional

from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel

from moviemate.kernel.identity.errors import InvalidTokenFailure, SigningFailure
from moviemate.logging_config import fingerprint, get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=7)

Clock = Callable[[], datetime]

# jose would otherwise reject on aud/iat/nbf/... claims; exp is checked here
# against the injected clock instead of jose's own wall clock.
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Identity(BaseModel):
    """Claims that identify the caller downstream."""

    user_id: int
    username: str = ""
    email: str = ""


class TokenClaims(Identity):
    """Full claim set embedded in a token."""

    iat: int
    exp: int

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)


class JWTManager:
    """
    JWT token creation and verification.

    The signing key is fixed at construction and shared by every call.
    """

    def __init__(
        self,
        secret_key: str,
        clock: Optional[Clock] = None,
    ):
        if not secret_key:
            raise ValueError("A signing key is required")
        self._secret_key = secret_key
        self._clock = clock or utc_now
        self.algorithm = ALGORITHM
        self.lifetime = TOKEN_LIFETIME

    def __repr__(self) -> str:
        return f"<JWTManager algorithm={self.algorithm}>"

    def now(self) -> datetime:
        return self._clock()

    def create_token(self, identity: Identity) -> tuple[str, TokenClaims]:
        """
        Sign a new token for the identity.

        Returns:
            Tuple of (token, claims)
        """
        issued = int(self.now().timestamp())
        claims = TokenClaims(
            user_id=identity.user_id,
            username=identity.username,
            email=identity.email,
            iat=issued,
            exp=issued + int(self.lifetime.total_seconds()),
        )
        try:
            token = jwt.encode(claims.model_dump(), self._secret_key, algorithm=self.algorithm)
        except JOSEError as exc:
            logger.error("Token signing failed", extra={"reason": type(exc).__name__})
            raise SigningFailure() from exc
        return token, claims

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Raises:
            InvalidTokenFailure: for any parse, algorithm, signature or expiry problem
        """
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError:
            self._reject(token, "malformed")

        if header.get("alg") != self.algorithm:
            self._reject(token, "algorithm_mismatch")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options=_DECODE_OPTIONS,
            )
        except JOSEError:
            self._reject(token, "bad_signature")

        claims = self._parse_claims(token, payload)
        if self.now().timestamp() >= claims.exp:
            self._reject(token, "expired")
        return claims

    def _parse_claims(self, token: str, payload: dict[str, Any]) -> TokenClaims:
        user_id = payload.get("user_id")
        exp = payload.get("exp")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            self._reject(token, "missing_user_id")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            self._reject(token, "missing_exp")
        iat = payload.get("iat")
        return TokenClaims(
            user_id=user_id,
            username=str(payload.get("username") or ""),
            email=str(payload.get("email") or ""),
            iat=int(iat) if isinstance(iat, (int, float)) and not isinstance(iat, bool) else 0,
            exp=int(exp),
        )

    @staticmethod
    def _reject(token: str, reason: str) -> NoReturn:
        logger.info(
            "Token rejected",
            extra={"reason": reason, "token_ref": fingerprint(token)},
        )
        raise InvalidTokenFailure()
