"""User API routes: own account, public profiles, search and per-user lists."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.dependencies.pagination import Pagination
from api.v1.dependencies import (
    get_auth_service,
    get_feed_service,
    get_profile_service,
)
from api.v1.schemas.common import PageMeta
from api.v1.schemas.post import PostListResponse, PostResponse
from api.v1.schemas.user import (
    MeDetailResponse,
    MeResponse,
    ProfileDetailResponse,
    ProfileUpdate,
    PublicProfileResponse,
    UserListResponse,
    UserSummaryResponse,
)
from core.config import settings
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.pagination import Page
from domain.entities.views import UserSummary
from domain.services.auth_service import AuthService
from domain.services.feed_service import FeedService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["users"])


def _user_list(page: Page[UserSummary]) -> UserListResponse:
    return UserListResponse(
        data=[UserSummaryResponse.model_validate(item) for item in page.items],
        meta=PageMeta.from_page(page),
    )


# --- Own account ---


@router.get(
    "/me",
    response_model=MeDetailResponse,
    summary="Get my account",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
    profile_service: ProfileService = Depends(get_profile_service),
) -> MeDetailResponse:
    """Get the authenticated user's account and profile details."""
    account = await auth_service.get_user(user.id)
    profile = await profile_service.get_profile(user.id)
    return MeDetailResponse(data=MeResponse.build(account, profile))


@router.patch(
    "/me",
    response_model=MeDetailResponse,
    summary="Update my profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "A field exceeds its maximum length"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_me(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
    profile_service: ProfileService = Depends(get_profile_service),
) -> MeDetailResponse:
    """Update display name, bio or avatar. Only fields sent are changed."""
    changes = body.model_dump(exclude_unset=True)
    profile = await profile_service.update_profile(user.id, changes)
    account = await auth_service.get_user(user.id)
    return MeDetailResponse(data=MeResponse.build(account, profile))


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my account",
    responses={
        204: {"description": "Account and all its content deleted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_me(
    request: Request,
    response: Response,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Delete the account with its profile, posts, comments, likes and follows."""
    await service.delete_account(user.id)
    response.delete_cookie(settings.session_cookie_name)


# --- Discovery ---


@router.get(
    "/search",
    response_model=UserListResponse,
    summary="Search users",
    responses={
        400: {"description": "Empty search query"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def search_users(
    request: Request,
    paging: Pagination,
    q: str = Query("", max_length=100, description="Username or display name fragment"),
    service: FeedService = Depends(get_feed_service),
) -> UserListResponse:
    """Find users whose username or display name contains ``q``.

    ``meta.total`` adds the username and display-name match counts, so a
    user matching both is counted twice.
    """
    page = await service.search_users(q, paging.page, paging.limit)
    return _user_list(page)


@router.get(
    "/{username}",
    response_model=ProfileDetailResponse,
    summary="Get a user's profile",
    responses={
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    username: str,
    viewer: OptionalUser,
    service: FeedService = Depends(get_feed_service),
) -> ProfileDetailResponse:
    """Public profile with follower, following and post counts.

    ``is_following`` is set only when a logged-in user views someone else.
    """
    view = await service.profile_page(username, viewer.id if viewer else None)
    return ProfileDetailResponse(data=PublicProfileResponse.from_view(view))


# --- Per-user lists ---


@router.get(
    "/{user_id}/posts",
    response_model=PostListResponse,
    summary="List a user's posts",
    responses={
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_user_posts(
    request: Request,
    user_id: UUID,
    paging: Pagination,
    viewer: OptionalUser,
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Posts written by one user, newest first."""
    page = await service.author_feed(
        user_id, viewer.id if viewer else None, paging.page, paging.limit
    )
    return PostListResponse(
        data=[PostResponse.from_view(view) for view in page.items],
        meta=PageMeta.from_page(page),
    )


@router.get(
    "/{user_id}/followers",
    response_model=UserListResponse,
    summary="List followers",
    responses={
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_followers(
    request: Request,
    user_id: UUID,
    paging: Pagination,
    service: FeedService = Depends(get_feed_service),
) -> UserListResponse:
    """Users following ``user_id``, most recent follow first."""
    page = await service.followers(user_id, paging.page, paging.limit)
    return _user_list(page)


@router.get(
    "/{user_id}/following",
    response_model=UserListResponse,
    summary="List followed users",
    responses={
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_following(
    request: Request,
    user_id: UUID,
    paging: Pagination,
    service: FeedService = Depends(get_feed_service),
) -> UserListResponse:
    """Users that ``user_id`` follows, most recent follow first."""
    page = await service.following(user_id, paging.page, paging.limit)
    return _user_list(page)
