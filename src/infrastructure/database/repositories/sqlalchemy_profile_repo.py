"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel, UserModel
from infrastructure.database.repositories.common import escape_like, fetch_page

# Both dialects share the ON CONFLICT DO UPDATE construct.
_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to a user."""
        model = await self._session.get(ProfileModel, user_id)
        return self._to_entity(model) if model else None

    async def get_for_users(self, user_ids: list[UUID]) -> dict[UUID, Profile]:
        """Get profiles for several users in a single query."""
        if not user_ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.user_id.in_(user_ids))
        result = await self._session.execute(stmt)
        return {model.user_id: self._to_entity(model) for model in result.scalars()}

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile, or overwrite the user's existing row.

        Runs as one INSERT ... ON CONFLICT (user_id) DO UPDATE; created_at
        keeps the value of the first insert.
        """
        insert = _INSERTS[self._session.get_bind().dialect.name]
        stmt = insert(ProfileModel).values(
            user_id=profile.user_id,
            display_name=profile.display_name,
            bio=profile.bio,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProfileModel.user_id],
            set_={
                "display_name": stmt.excluded.display_name,
                "bio": stmt.excluded.bio,
                "avatar_url": stmt.excluded.avatar_url,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self._session.execute(stmt)

        model = await self._session.get(ProfileModel, profile.user_id, populate_existing=True)
        if not model:
            raise ValueError(f"Profile for {profile.user_id} not found")
        return self._to_entity(model)

    async def search_by_display_name(
        self, query: str, page: int, limit: int
    ) -> tuple[list[UUID], int]:
        """Case-insensitive substring match on display name, oldest account first."""
        stmt = (
            select(ProfileModel.user_id)
            .join(UserModel, UserModel.id == ProfileModel.user_id)
            .where(ProfileModel.display_name.ilike(f"%{escape_like(query)}%", escape="\\"))
            .order_by(UserModel.created_at, UserModel.id)
        )
        user_ids, total = await fetch_page(self._session, stmt, page, limit)
        return user_ids, total

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            user_id=model.user_id,
            display_name=model.display_name,
            bio=model.bio,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            user_id=entity.user_id,
            display_name=entity.display_name,
            bio=entity.bio,
            avatar_url=entity.avatar_url,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
