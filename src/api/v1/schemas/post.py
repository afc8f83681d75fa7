"""Pydantic schemas for posts and likes."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import PageMeta, RequestModel
from api.v1.schemas.user import UserSummaryResponse
from domain.entities.views import PostView


class PostCreate(RequestModel):
    """Schema for publishing a post.

    Length and blank-content rules are enforced by the domain so that they
    surface as 400 errors with a specific error code.
    """

    content: str
    attachments: list[str] | None = Field(None, description="Media URIs")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "First light over the harbour this morning.",
                "attachments": ["https://cdn.example.com/img/harbour.jpg"],
            }
        },
    )


class PostUpdate(RequestModel):
    """Schema for editing a post. Omitted attachments stay unchanged."""

    content: str
    attachments: list[str] | None = None


class PostResponse(BaseModel):
    """A post card with author details and engagement counters."""

    id: UUID
    author_id: UUID
    author: UserSummaryResponse | None = None
    content: str
    attachments: list[str] = Field(default_factory=list)
    like_count: int = 0
    comment_count: int = 0
    viewer_has_liked: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        post = view.post
        return cls(
            id=post.id,
            author_id=post.author_id,
            author=UserSummaryResponse.from_summary(view.author),
            content=post.content,
            attachments=post.attachments or [],
            like_count=view.like_count,
            comment_count=view.comment_count,
            viewer_has_liked=view.viewer_has_liked,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostListResponse(BaseModel):
    """Paginated list of post cards."""

    data: list[PostResponse]
    meta: PageMeta


class LikeResponse(BaseModel):
    """Like state of a post after a like action."""

    post_id: UUID
    like_count: int
    viewer_has_liked: bool = True


class PostDetailResponse(BaseModel):
    data: PostResponse


class LikeDetailResponse(BaseModel):
    data: LikeResponse
