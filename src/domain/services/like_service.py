"""Engagement service: likes on posts."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyLikedError,
    DuplicateKeyError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.like import Like
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class LikeService:
    """Service layer for likes. One like per user per post."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def like(self, post_id: UUID, user_id: UUID) -> Like:
        """Like a post. A second like by the same user is a conflict."""
        async with self._uow_factory() as uow:
            if not await uow.posts.get(post_id):
                raise PostNotFoundError(str(post_id))
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            if await uow.likes.get_for_user(post_id, user_id):
                raise AlreadyLikedError(str(post_id))

            try:
                like = await uow.likes.create(Like(post_id=post_id, user_id=user_id))
            except DuplicateKeyError as e:
                raise AlreadyLikedError(str(post_id)) from e
            await uow.commit()

        logger.info("post_liked", post_id=str(post_id), user_id=str(user_id))
        return like

    async def unlike(self, post_id: UUID, user_id: UUID) -> None:
        """Remove the user's like from a post."""
        async with self._uow_factory() as uow:
            like = await uow.likes.get_for_user(post_id, user_id)
            if not like:
                raise NotLikedError(str(post_id))

            await uow.likes.delete(like.id)
            await uow.commit()

        logger.info("post_unliked", post_id=str(post_id), user_id=str(user_id))

    async def count_by_post(self, post_id: UUID) -> int:
        async with self._uow_factory() as uow:
            return await uow.likes.count_by_post(post_id)

    async def has_user_liked(self, post_id: UUID, user_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            return await uow.likes.get_for_user(post_id, user_id) is not None
