"""SQLAlchemy implementation of Follow repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateKeyError
from domain.entities.follow import Follow
from domain.entities.user import User
from infrastructure.database.models import FollowModel, UserModel
from infrastructure.database.repositories.common import fetch_page, is_unique_violation


class SQLAlchemyFollowRepository:
    """SQLAlchemy implementation of IFollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, follower_id: UUID, followee_id: UUID) -> Follow | None:
        """Get the edge for an ordered pair."""
        stmt = select(FollowModel).where(
            FollowModel.follower_id == follower_id,
            FollowModel.followee_id == followee_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_followers(
        self, user_id: UUID, page: int, limit: int
    ) -> tuple[list[User], int]:
        """Users following ``user_id``, newest edge first."""
        stmt = (
            select(UserModel)
            .join(FollowModel, FollowModel.follower_id == UserModel.id)
            .where(FollowModel.followee_id == user_id)
            .order_by(FollowModel.created_at.desc(), FollowModel.id.desc())
        )
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._user_to_entity(model) for model in models], total

    async def list_following(
        self, user_id: UUID, page: int, limit: int
    ) -> tuple[list[User], int]:
        """Users ``user_id`` follows, newest edge first."""
        stmt = (
            select(UserModel)
            .join(FollowModel, FollowModel.followee_id == UserModel.id)
            .where(FollowModel.follower_id == user_id)
            .order_by(FollowModel.created_at.desc(), FollowModel.id.desc())
        )
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._user_to_entity(model) for model in models], total

    async def count_followers(self, user_id: UUID) -> int:
        """Count incoming edges."""
        stmt = (
            select(func.count())
            .select_from(FollowModel)
            .where(FollowModel.followee_id == user_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_following(self, user_id: UUID) -> int:
        """Count outgoing edges."""
        stmt = (
            select(func.count())
            .select_from(FollowModel)
            .where(FollowModel.follower_id == user_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, follow: Follow) -> Follow:
        """Create an edge; the pair unique constraint backs the service check."""
        model = self._to_model(follow)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateKeyError("follow") from e
            raise
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete an edge."""
        stmt = delete(FollowModel).where(FollowModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: FollowModel) -> Follow:
        """Convert ORM model to domain entity."""
        return Follow(
            id=model.id,
            follower_id=model.follower_id,
            followee_id=model.followee_id,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Follow) -> FollowModel:
        """Convert domain entity to ORM model."""
        return FollowModel(
            id=entity.id,
            follower_id=entity.follower_id,
            followee_id=entity.followee_id,
            created_at=entity.created_at,
        )

    def _user_to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
