"""Engagement service: comments on posts."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.comment import DEFAULT_MAX_COMMENT_LENGTH, Comment
from domain.entities.pagination import Page, validate_page
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CommentService:
    """Service layer for Comment business logic.

    Editing is reserved for the comment's author. Deleting is allowed to the
    author or to the owner of the post the comment sits on.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_comment_length: int = DEFAULT_MAX_COMMENT_LENGTH,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_comment_length = max_comment_length

    async def create_comment(self, post_id: UUID, author_id: UUID, content: str) -> Comment:
        """Add a comment to an existing post."""
        async with self._uow_factory() as uow:
            if not await uow.posts.get(post_id):
                raise PostNotFoundError(str(post_id))
            if not await uow.users.get(author_id):
                raise UserNotFoundError(str(author_id))

            comment = Comment.create(
                post_id, author_id, content, max_length=self._max_comment_length
            )
            created = await uow.comments.create(comment)
            await uow.commit()

        logger.info(
            "comment_created",
            comment_id=str(created.id),
            post_id=str(post_id),
            author_id=str(author_id),
        )
        return created

    async def get_comment(self, comment_id: UUID) -> Comment:
        """Get a comment by ID."""
        async with self._uow_factory() as uow:
            comment = await uow.comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            return comment

    async def update_comment(
        self, comment_id: UUID, requester_id: UUID, content: str
    ) -> Comment:
        """Edit a comment. Author only."""
        async with self._uow_factory() as uow:
            comment = await uow.comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if not comment.can_edit(requester_id):
                raise AuthorizationError(
                    "Not authorized to update this comment",
                    details={"comment_id": str(comment_id)},
                )

            comment.update_content(content, max_length=self._max_comment_length)
            updated = await uow.comments.update(comment)
            await uow.commit()

        logger.info("comment_updated", comment_id=str(comment_id))
        return updated

    async def delete_comment(self, comment_id: UUID, requester_id: UUID) -> None:
        """Delete a comment. Author or post owner."""
        async with self._uow_factory() as uow:
            comment = await uow.comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))

            moderated = False
            if not comment.can_edit(requester_id):
                post = await uow.posts.get(comment.post_id)
                if not post or not comment.can_moderate(requester_id, post):
                    raise AuthorizationError(
                        "Not authorized to delete this comment",
                        details={"comment_id": str(comment_id)},
                    )
                moderated = True

            await uow.comments.delete(comment_id)
            await uow.commit()

        logger.info(
            "comment_deleted",
            comment_id=str(comment_id),
            deleted_by=str(requester_id),
            moderated=moderated,
        )

    async def list_by_post(self, post_id: UUID, page: int, limit: int) -> Page[Comment]:
        """Comments on a post in conversation order (oldest first)."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.posts.get(post_id):
                raise PostNotFoundError(str(post_id))
            comments, total = await uow.comments.list_by_post(post_id, page, limit)
            return Page(items=comments, total=total, page=page, limit=limit)

    async def count_by_post(self, post_id: UUID) -> int:
        async with self._uow_factory() as uow:
            return await uow.comments.count_by_post(post_id)
