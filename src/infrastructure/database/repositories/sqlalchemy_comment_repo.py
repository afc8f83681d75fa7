"""SQLAlchemy implementation of Comment repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.comment import Comment
from infrastructure.database.models import CommentModel
from infrastructure.database.repositories.common import fetch_page


class SQLAlchemyCommentRepository:
    """SQLAlchemy implementation of ICommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Comment | None:
        """Get a comment by ID."""
        model = await self._session.get(CommentModel, id)
        return self._to_entity(model) if model else None

    async def list_by_post(
        self, post_id: UUID, page: int, limit: int
    ) -> tuple[list[Comment], int]:
        """Comments on a post, oldest first."""
        stmt = (
            select(CommentModel)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        models, total = await fetch_page(self._session, stmt, page, limit)
        return [self._to_entity(model) for model in models], total

    async def count_by_post(self, post_id: UUID) -> int:
        """Count comments on a post."""
        stmt = (
            select(func.count())
            .select_from(CommentModel)
            .where(CommentModel.post_id == post_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def count_by_posts(self, post_ids: list[UUID]) -> dict[UUID, int]:
        """Count comments for several posts in a single query."""
        if not post_ids:
            return {}
        stmt = (
            select(CommentModel.post_id, func.count().label("comment_count"))
            .where(CommentModel.post_id.in_(post_ids))
            .group_by(CommentModel.post_id)
        )
        result = await self._session.execute(stmt)
        return {row.post_id: row.comment_count for row in result}

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        model = self._to_model(comment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, comment: Comment) -> Comment:
        """Persist a content change."""
        model = await self._session.get(CommentModel, comment.id)
        if not model:
            raise ValueError(f"Comment {comment.id} not found")

        model.content = comment.content
        model.updated_at = comment.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a comment."""
        stmt = delete(CommentModel).where(CommentModel.id == id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: CommentModel) -> Comment:
        """Convert ORM model to domain entity."""
        return Comment(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Comment) -> CommentModel:
        """Convert domain entity to ORM model."""
        return CommentModel(
            id=entity.id,
            post_id=entity.post_id,
            author_id=entity.author_id,
            content=entity.content,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
