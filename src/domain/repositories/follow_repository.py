"""Follow repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.follow import Follow
from domain.entities.user import User


class IFollowRepository(Protocol):
    """Repository interface for Follow edges."""

    async def get(self, follower_id: UUID, followee_id: UUID) -> Follow | None:
        """Get the edge for an ordered pair."""
        ...

    async def list_followers(
        self, user_id: UUID, page: int, limit: int
    ) -> tuple[list[User], int]:
        """Users following ``user_id``, newest edge first."""
        ...

    async def list_following(
        self, user_id: UUID, page: int, limit: int
    ) -> tuple[list[User], int]:
        """Users ``user_id`` follows, newest edge first."""
        ...

    async def count_followers(self, user_id: UUID) -> int:
        """Count incoming edges."""
        ...

    async def count_following(self, user_id: UUID) -> int:
        """Count outgoing edges."""
        ...

    async def create(self, follow: Follow) -> Follow:
        """Create an edge. Raises DuplicateKeyError on a duplicate pair."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an edge."""
        ...
