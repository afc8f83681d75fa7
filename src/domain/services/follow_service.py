"""Social graph service: directed follow edges between users."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyFollowingError,
    DuplicateKeyError,
    NotFollowingError,
    SelfFollowError,
    UserNotFoundError,
)
from domain.entities.follow import Follow, FollowStats
from domain.entities.pagination import Page, validate_page
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class FollowService:
    """Service layer for follow/unfollow and follower queries.

    Duplicate follows are reported, never silently accepted.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def follow(self, follower_id: UUID, followee_id: UUID) -> Follow:
        """Create the edge follower -> followee."""
        if follower_id == followee_id:
            raise SelfFollowError()

        async with self._uow_factory() as uow:
            if not await uow.users.get(follower_id):
                raise UserNotFoundError(str(follower_id))
            if not await uow.users.get(followee_id):
                raise UserNotFoundError(str(followee_id))

            if await uow.follows.get(follower_id, followee_id):
                raise AlreadyFollowingError(str(followee_id))

            try:
                follow = await uow.follows.create(
                    Follow(follower_id=follower_id, followee_id=followee_id)
                )
            except DuplicateKeyError as e:
                raise AlreadyFollowingError(str(followee_id)) from e
            await uow.commit()

        logger.info(
            "user_followed",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        )
        return follow

    async def unfollow(self, follower_id: UUID, followee_id: UUID) -> None:
        """Remove the edge follower -> followee."""
        async with self._uow_factory() as uow:
            follow = await uow.follows.get(follower_id, followee_id)
            if not follow:
                raise NotFollowingError(str(followee_id))

            await uow.follows.delete(follow.id)
            await uow.commit()

        logger.info(
            "user_unfollowed",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        )

    async def get_followers(self, user_id: UUID, page: int, limit: int) -> Page[User]:
        """Users following ``user_id``, newest edge first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            await self._require_user(uow, user_id)
            users, total = await uow.follows.list_followers(user_id, page, limit)
            return Page(items=users, total=total, page=page, limit=limit)

    async def get_following(self, user_id: UUID, page: int, limit: int) -> Page[User]:
        """Users ``user_id`` follows, newest edge first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            await self._require_user(uow, user_id)
            users, total = await uow.follows.list_following(user_id, page, limit)
            return Page(items=users, total=total, page=page, limit=limit)

    async def is_following(self, follower_id: UUID, followee_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            return await uow.follows.get(follower_id, followee_id) is not None

    async def follower_count(self, user_id: UUID) -> int:
        async with self._uow_factory() as uow:
            return await uow.follows.count_followers(user_id)

    async def following_count(self, user_id: UUID) -> int:
        async with self._uow_factory() as uow:
            return await uow.follows.count_following(user_id)

    async def get_stats(self, user_id: UUID) -> FollowStats:
        """Both counts for a user in one unit of work."""
        async with self._uow_factory() as uow:
            await self._require_user(uow, user_id)
            return FollowStats(
                followers=await uow.follows.count_followers(user_id),
                following=await uow.follows.count_following(user_id),
            )

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> None:
        if not await uow.users.get(user_id):
            raise UserNotFoundError(str(user_id))
