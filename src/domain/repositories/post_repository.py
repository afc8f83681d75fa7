"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post


class IPostRepository(Protocol):
    """Repository interface for Post entities.

    All list methods order newest first and return ``(items, total)``.
    """

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def list_all(self, page: int, limit: int) -> tuple[list[Post], int]:
        """Get every post."""
        ...

    async def list_by_author(
        self, author_id: UUID, page: int, limit: int
    ) -> tuple[list[Post], int]:
        """Get posts written by one user."""
        ...

    async def list_for_follower(
        self, follower_id: UUID, page: int, limit: int
    ) -> tuple[list[Post], int]:
        """Get posts by the accounts ``follower_id`` follows."""
        ...

    async def count_by_author(self, author_id: UUID) -> int:
        """Count posts written by one user."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Persist content/attachment changes."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post; comments and likes cascade in the database."""
        ...
