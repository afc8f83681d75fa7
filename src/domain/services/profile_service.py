"""Profile service layer."""

from collections.abc import Callable, Mapping
from uuid import UUID

import structlog

from core.exceptions import UserNotFoundError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for reading and editing profile details."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_profile(self, user_id: UUID) -> Profile | None:
        """Get a user's profile; None if they never filled one in."""
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            return await uow.profiles.get_for_user(user_id)

    async def update_profile(
        self, user_id: UUID, changes: Mapping[str, str | None]
    ) -> Profile:
        """Apply the supplied fields, creating the profile on first use."""
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))

            profile = await uow.profiles.get_for_user(user_id)
            created = profile is None
            if profile is None:
                profile = Profile(user_id=user_id)

            profile.update_details(changes)
            saved = await uow.profiles.upsert(profile)
            await uow.commit()

        logger.info(
            "profile_updated",
            user_id=str(user_id),
            created=created,
            fields=sorted(changes),
        )
        return saved
