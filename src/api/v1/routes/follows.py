"""Follow API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_follow_service
from api.v1.schemas.user import FollowDetailResponse, FollowResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.follow_service import FollowService

router = APIRouter(prefix="/users", tags=["follows"])


@router.post(
    "/{user_id}/follow",
    response_model=FollowDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        201: {"description": "Now following"},
        400: {"description": "Cannot follow yourself"},
        404: {"description": "User not found"},
        409: {"description": "Already following"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def follow_user(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    service: FollowService = Depends(get_follow_service),
) -> FollowDetailResponse:
    """Start following ``user_id``."""
    follow = await service.follow(user.id, user_id)
    return FollowDetailResponse(data=FollowResponse.model_validate(follow))


@router.delete(
    "/{user_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a user",
    responses={
        204: {"description": "No longer following"},
        404: {"description": "Not following this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unfollow_user(
    request: Request,
    user_id: UUID,
    user: CurrentUser,
    service: FollowService = Depends(get_follow_service),
) -> None:
    """Stop following ``user_id``."""
    await service.unfollow(user.id, user_id)
