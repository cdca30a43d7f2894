"""
Session token issuance and verification.

Tokens are stateless HS256 JWTs with a fixed lifetime. Nothing is stored
server-side, so a token stays valid until it expires.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from gadgetops.config import get_settings
from gadgetops.errors import InvalidTokenError

TOKEN_TYPE = "access"


class SessionTokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str  # User ID
    iat: datetime
    exp: datetime
    type: str = TOKEN_TYPE

    @property
    def user_id(self) -> uuid.UUID:
        return uuid.UUID(self.sub)


class TokenService:
    """
    Signs and verifies session tokens.

    Secret, algorithm and lifetime default to the application settings.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        if expire_minutes is None:
            expire_minutes = settings.access_token_expire_minutes
        self.ttl = timedelta(minutes=expire_minutes)

    def issue(self, user_id: uuid.UUID, now: Optional[datetime] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: User's unique identifier
            now: Issue time override (tests)

        Returns:
            Encoded JWT
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "id": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl,
            "type": TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> SessionTokenPayload:
        """
        Verify signature and expiry and return the claims.

        Raises:
            InvalidTokenError: tampered, expired, malformed, or not a session token
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError() from e

        if claims.get("type") != TOKEN_TYPE or "sub" not in claims:
            raise InvalidTokenError()

        try:
            uuid.UUID(str(claims["sub"]))
            return SessionTokenPayload(
                sub=claims["sub"],
                iat=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError() from e

    def verify(self, token: str) -> uuid.UUID:
        """Verify a token and return the embedded user id."""
        return self.decode(token).user_id


# Default service instance
_token_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Get or create the default token service."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
