"""Comment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.post import Post, clean_content

DEFAULT_MAX_COMMENT_LENGTH = 1000


@dataclass
class Comment:
    """Domain entity for a Comment attached to a Post."""

    post_id: UUID
    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        post_id: UUID,
        author_id: UUID,
        content: str,
        *,
        max_length: int = DEFAULT_MAX_COMMENT_LENGTH,
    ) -> "Comment":
        """Build a validated new comment."""
        return cls(
            post_id=post_id,
            author_id=author_id,
            content=clean_content(content, max_length),
        )

    def update_content(
        self, content: str, *, max_length: int = DEFAULT_MAX_COMMENT_LENGTH
    ) -> None:
        self.content = clean_content(content, max_length)
        self.updated_at = datetime.utcnow()

    def can_edit(self, user_id: UUID) -> bool:
        """Authors may edit and delete their own comments."""
        return self.author_id == user_id

    def can_moderate(self, user_id: UUID, post: Post) -> bool:
        """The owner of the parent post may remove comments on it."""
        return post.id == self.post_id and post.author_id == user_id
