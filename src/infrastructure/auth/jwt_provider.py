"""JWT authentication provider implementation.

Tokens are HS256-signed and issued by this service on signup and login.
The same token is accepted as a bearer credential or as the session cookie.

Payload structure:
    {
        "sub": "user-uuid",
        "username": "alice",
        "email": "alice@example.com",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def expire_seconds(self) -> int:
        """Token lifetime, reused as the session cookie max-age."""
        return self._expire_minutes * 60

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None

        user_id = payload.get("sub")
        username = payload.get("username")

        if not user_id or not username:
            return None

        try:
            parsed_id = UUID(user_id)
        except ValueError:
            logger.warning("Token carried a malformed subject: %r", user_id)
            return None

        return TokenUser(
            id=parsed_id,
            username=username,
            email=payload.get("email"),
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        expire = now + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
