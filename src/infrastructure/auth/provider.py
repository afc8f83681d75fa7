"""Session token provider protocol.

A session token identifies one account. It is handed out by signup and
login and comes back either as a bearer credential or as the session cookie.
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from domain.entities.user import User


@dataclass(frozen=True)
class TokenUser:
    """The account a valid session token resolves to."""

    id: UUID
    username: str
    email: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "TokenUser":
        return cls(id=user.id, username=user.username, email=user.email)


class IAuthProvider(Protocol):
    """Issues and verifies session tokens."""

    @property
    def expire_seconds(self) -> int:
        """Token lifetime in seconds."""
        ...

    async def validate_token(self, token: str) -> TokenUser | None:
        """Resolve a token to its account; None when forged, expired or malformed."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Sign a new session token for ``user``."""
        ...
