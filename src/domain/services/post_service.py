"""Content service: posts and their ownership rules."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import AuthorizationError, PostNotFoundError, UserNotFoundError
from domain.entities.pagination import Page, validate_page
from domain.entities.post import DEFAULT_MAX_ATTACHMENTS, DEFAULT_MAX_POST_LENGTH, Post
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_post_length: int = DEFAULT_MAX_POST_LENGTH,
        max_attachments: int = DEFAULT_MAX_ATTACHMENTS,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_post_length = max_post_length
        self._max_attachments = max_attachments

    async def create_post(
        self,
        author_id: UUID,
        content: str,
        attachments: list[str] | None = None,
    ) -> Post:
        """Create a new post. Any authenticated user may post."""
        post = Post.create(
            author_id,
            content,
            attachments,
            max_length=self._max_post_length,
            max_attachments=self._max_attachments,
        )

        async with self._uow_factory() as uow:
            if not await uow.users.get(author_id):
                raise UserNotFoundError(str(author_id))
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), author_id=str(author_id))
        return created

    async def get_post(self, post_id: UUID) -> Post:
        """Get a post by ID."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def update_post(
        self,
        post_id: UUID,
        requester_id: UUID,
        content: str,
        attachments: list[str] | None = None,
    ) -> Post:
        """Edit a post's content; ``attachments=None`` leaves them untouched."""
        async with self._uow_factory() as uow:
            post = await self._get_owned(uow, post_id, requester_id)

            post.update_content(content, max_length=self._max_post_length)
            if attachments is not None:
                post.update_attachments(attachments, max_attachments=self._max_attachments)

            updated = await uow.posts.update(post)
            await uow.commit()

        logger.info("post_updated", post_id=str(post_id))
        return updated

    async def delete_post(self, post_id: UUID, requester_id: UUID) -> None:
        """Delete a post. Comments and likes go with it via FK cascade."""
        async with self._uow_factory() as uow:
            await self._get_owned(uow, post_id, requester_id)
            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), author_id=str(requester_id))

    async def get_feed(self, page: int, limit: int) -> Page[Post]:
        """All posts, newest first, the same for every viewer."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            posts, total = await uow.posts.list_all(page, limit)
            return Page(items=posts, total=total, page=page, limit=limit)

    async def get_user_feed(self, viewer_id: UUID, page: int, limit: int) -> Page[Post]:
        """Posts by the accounts the viewer follows, newest first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            posts, total = await uow.posts.list_for_follower(viewer_id, page, limit)
            return Page(items=posts, total=total, page=page, limit=limit)

    async def get_posts_by_author(
        self, author_id: UUID, page: int, limit: int
    ) -> Page[Post]:
        """Posts written by one user, newest first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.users.get(author_id):
                raise UserNotFoundError(str(author_id))
            posts, total = await uow.posts.list_by_author(author_id, page, limit)
            return Page(items=posts, total=total, page=page, limit=limit)

    async def _get_owned(self, uow: IUnitOfWork, post_id: UUID, requester_id: UUID) -> Post:
        """Fetch a post and verify the requester wrote it."""
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        if not post.can_be_modified_by(requester_id):
            raise AuthorizationError(
                "Not authorized to modify this post",
                details={"post_id": str(post_id)},
            )
        return post
