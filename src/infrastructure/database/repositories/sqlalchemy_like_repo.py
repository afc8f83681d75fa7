"""SQLAlchemy implementation of Like repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateKeyError
from domain.entities.like import Like
from infrastructure.database.models import LikeModel
from infrastructure.database.repositories.common import is_unique_violation


class SQLAlchemyLikeRepository:
    """SQLAlchemy implementation of ILikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, post_id: UUID, user_id: UUID) -> Like | None:
        """Get the like a user left on a post, if any."""
        stmt = select(LikeModel).where(
            LikeModel.post_id == post_id,
            LikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def count_by_post(self, post_id: UUID) -> int:
        """Count likes on a post."""
        stmt = select(func.count()).select_from(LikeModel).where(LikeModel.post_id == post_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_by_posts(self, post_ids: list[UUID]) -> dict[UUID, int]:
        """Count likes for several posts in a single query."""
        if not post_ids:
            return {}
        stmt = (
            select(LikeModel.post_id, func.count().label("like_count"))
            .where(LikeModel.post_id.in_(post_ids))
            .group_by(LikeModel.post_id)
        )
        result = await self._session.execute(stmt)
        return {row.post_id: row.like_count for row in result}

    async def liked_post_ids(self, user_id: UUID, post_ids: list[UUID]) -> set[UUID]:
        """Return which of ``post_ids`` the user has liked."""
        if not post_ids:
            return set()
        stmt = select(LikeModel.post_id).where(
            LikeModel.user_id == user_id,
            LikeModel.post_id.in_(post_ids),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars())

    async def create(self, like: Like) -> Like:
        """Create a like; the (user, post) unique constraint backs the service check."""
        model = self._to_model(like)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateKeyError("like") from e
            raise
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a like."""
        stmt = delete(LikeModel).where(LikeModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: LikeModel) -> Like:
        """Convert ORM model to domain entity."""
        return Like(
            id=model.id,
            post_id=model.post_id,
            user_id=model.user_id,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Like) -> LikeModel:
        """Convert domain entity to ORM model."""
        return LikeModel(
            id=entity.id,
            post_id=entity.post_id,
            user_id=entity.user_id,
            created_at=entity.created_at,
        )
