"""Pydantic schemas for comments."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from api.v1.schemas.common import PageMeta, RequestModel
from api.v1.schemas.user import UserSummaryResponse
from domain.entities.views import CommentView


class CommentCreate(RequestModel):
    """Schema for commenting on a post."""

    content: str


class CommentUpdate(RequestModel):
    """Schema for editing a comment."""

    content: str


class CommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    author_id: UUID
    author: UserSummaryResponse | None = None
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        comment = view.comment
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            author=UserSummaryResponse.from_summary(view.author),
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentListResponse(BaseModel):
    """Paginated list of comments, oldest first."""

    data: list[CommentResponse]
    meta: PageMeta


class CommentDetailResponse(BaseModel):
    data: CommentResponse
