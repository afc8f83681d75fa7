"""Comment API routes addressed by comment id."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_comment_service, get_feed_service
from api.v1.schemas.comment import CommentDetailResponse, CommentResponse, CommentUpdate
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.comment_service import CommentService
from domain.services.feed_service import FeedService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.patch(
    "/{comment_id}",
    response_model=CommentDetailResponse,
    summary="Edit a comment",
    responses={
        200: {"description": "Comment updated"},
        400: {"description": "Empty or too long content"},
        403: {"description": "Not the author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_comment(
    request: Request,
    comment_id: UUID,
    body: CommentUpdate,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
    feed: FeedService = Depends(get_feed_service),
) -> CommentDetailResponse:
    """Edit your own comment."""
    await service.update_comment(comment_id, user.id, body.content)
    view = await feed.comment_detail(comment_id)
    return CommentDetailResponse(data=CommentResponse.from_view(view))


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={
        204: {"description": "Comment deleted"},
        403: {"description": "Neither the comment author nor the post owner"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    comment_id: UUID,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> None:
    """Delete a comment. Post owners may remove comments on their posts."""
    await service.delete_comment(comment_id, user.id)
