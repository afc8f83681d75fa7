"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_for_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        ...

    async def get_for_users(self, user_ids: list[UUID]) -> dict[UUID, Profile]:
        """Get profiles for several users in one query."""
        ...

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile or overwrite the existing row for its user."""
        ...

    async def search_by_display_name(
        self, query: str, page: int, limit: int
    ) -> tuple[list[UUID], int]:
        """Case-insensitive substring search returning matching user IDs."""
        ...
