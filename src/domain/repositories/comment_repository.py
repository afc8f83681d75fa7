"""Comment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.comment import Comment


class ICommentRepository(Protocol):
    """Repository interface for Comment entities."""

    async def get(self, id: UUID) -> Comment | None:
        """Get a comment by ID."""
        ...

    async def list_by_post(
        self, post_id: UUID, page: int, limit: int
    ) -> tuple[list[Comment], int]:
        """Get comments on a post, oldest first."""
        ...

    async def count_by_post(self, post_id: UUID) -> int:
        """Count comments on a post."""
        ...

    async def count_by_posts(self, post_ids: list[UUID]) -> dict[UUID, int]:
        """Count comments for several posts in a single query."""
        ...

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        ...

    async def update(self, comment: Comment) -> Comment:
        """Persist a content change."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a comment."""
        ...
