"""Like repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.like import Like


class ILikeRepository(Protocol):
    """Repository interface for Like entities."""

    async def get_for_user(self, post_id: UUID, user_id: UUID) -> Like | None:
        """Get the like a user left on a post, if any."""
        ...

    async def count_by_post(self, post_id: UUID) -> int:
        """Count likes on a post."""
        ...

    async def count_by_posts(self, post_ids: list[UUID]) -> dict[UUID, int]:
        """Count likes for several posts in a single query."""
        ...

    async def liked_post_ids(self, user_id: UUID, post_ids: list[UUID]) -> set[UUID]:
        """Return which of ``post_ids`` the user has liked."""
        ...

    async def create(self, like: Like) -> Like:
        """Create a like. Raises DuplicateKeyError on a duplicate pair."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a like."""
        ...
