"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post
from infrastructure.database.models import FollowModel, PostModel
from infrastructure.database.repositories.common import fetch_page


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        model = await self._session.get(PostModel, id)
        return self._to_entity(model) if model else None

    async def list_all(self, page: int, limit: int) -> tuple[list[Post], int]:
        """Every post, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc(), PostModel.id.desc())
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._to_entity(model) for model in models], total

    async def list_by_author(
        self, author_id: UUID, page: int, limit: int
    ) -> tuple[list[Post], int]:
        """Posts written by one user, newest first."""
        stmt = (
            select(PostModel)
            .where(PostModel.author_id == author_id)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
        )
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._to_entity(model) for model in models], total

    async def list_for_follower(
        self, follower_id: UUID, page: int, limit: int
    ) -> tuple[list[Post], int]:
        """Posts by followed accounts: posts joined to the follower's edges."""
        stmt = (
            select(PostModel)
            .join(FollowModel, FollowModel.followee_id == PostModel.author_id)
            .where(FollowModel.follower_id == follower_id)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
        )
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._to_entity(model) for model in models], total

    async def count_by_author(self, author_id: UUID) -> int:
        """Count posts written by one user."""
        stmt = select(func.count()).select_from(PostModel).where(PostModel.author_id == author_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Persist content/attachment changes."""
        model = await self._session.get(PostModel, post.id)
        if not model:
            raise ValueError(f"Post {post.id} not found")

        model.content = post.content
        model.attachments = post.attachments
        model.updated_at = post.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post. Comments and likes are removed by the FK cascade."""
        stmt = delete(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            attachments=list(model.attachments) if model.attachments else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            author_id=entity.author_id,
            content=entity.content,
            attachments=entity.attachments,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
