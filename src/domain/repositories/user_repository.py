"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, User]:
        """Get several users in one query, keyed by ID."""
        ...

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact (case-sensitive) username."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by normalized email."""
        ...

    async def search_by_username(
        self, query: str, page: int, limit: int
    ) -> tuple[list[User], int]:
        """Case-insensitive substring search, oldest account first."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateKeyError("email"|"username")."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a user; owned rows go with it via FK cascade."""
        ...
