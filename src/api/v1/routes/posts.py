"""Post API routes, including comments and likes nested under a post."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.dependencies.pagination import Pagination
from api.v1.dependencies import (
    get_comment_service,
    get_feed_service,
    get_like_service,
    get_post_service,
)
from api.v1.schemas.comment import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
)
from api.v1.schemas.common import PageMeta
from api.v1.schemas.post import (
    LikeDetailResponse,
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.pagination import Page
from domain.entities.views import PostView
from domain.services.comment_service import CommentService
from domain.services.feed_service import FeedService
from domain.services.like_service import LikeService
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def _post_list(page: Page[PostView]) -> PostListResponse:
    return PostListResponse(
        data=[PostResponse.from_view(view) for view in page.items],
        meta=PageMeta.from_page(page),
    )


# --- Feeds ---


@router.get(
    "",
    response_model=PostListResponse,
    summary="Global feed",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    paging: Pagination,
    viewer: OptionalUser,
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Every post, newest first. ``viewer_has_liked`` is set for logged-in users."""
    page = await service.global_feed(viewer.id if viewer else None, paging.page, paging.limit)
    return _post_list(page)


@router.get(
    "/feed",
    response_model=PostListResponse,
    summary="Following feed",
    responses={
        401: {"description": "Authentication required"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def following_feed(
    request: Request,
    paging: Pagination,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Posts by the users you follow, newest first. Your own posts are not included."""
    page = await service.user_feed(user.id, paging.page, paging.limit)
    return _post_list(page)


# --- Posts ---


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created"},
        400: {"description": "Empty or too long content, or too many attachments"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
    feed: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Publish a post with optional media attachments."""
    post = await service.create_post(user.id, body.content, body.attachments)
    view = await feed.post_detail(post.id, user.id)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={
        404: {"description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    viewer: OptionalUser,
    feed: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """A single post with its author and counters."""
    view = await feed.post_detail(post_id, viewer.id if viewer else None)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.patch(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Edit a post",
    responses={
        200: {"description": "Post updated"},
        400: {"description": "Empty or too long content"},
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_post(
    request: Request,
    post_id: UUID,
    body: PostUpdate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
    feed: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Edit your own post."""
    await service.update_post(post_id, user.id, body.content, body.attachments)
    view = await feed.post_detail(post_id, user.id)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post, its comments and likes deleted"},
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> None:
    """Delete your own post together with its comments and likes."""
    await service.delete_post(post_id, user.id)


# --- Comments ---


@router.get(
    "/{post_id}/comments",
    response_model=CommentListResponse,
    summary="List comments on a post",
    responses={
        404: {"description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_comments(
    request: Request,
    post_id: UUID,
    paging: Pagination,
    feed: FeedService = Depends(get_feed_service),
) -> CommentListResponse:
    """Comments in conversational order, oldest first."""
    page = await feed.post_comments(post_id, paging.page, paging.limit)
    return CommentListResponse(
        data=[CommentResponse.from_view(view) for view in page.items],
        meta=PageMeta.from_page(page),
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        201: {"description": "Comment created"},
        400: {"description": "Empty or too long content"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
    feed: FeedService = Depends(get_feed_service),
) -> CommentDetailResponse:
    comment = await service.create_comment(post_id, user.id, body.content)
    view = await feed.comment_detail(comment.id)
    return CommentDetailResponse(data=CommentResponse.from_view(view))


# --- Likes ---


@router.post(
    "/{post_id}/like",
    response_model=LikeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like a post",
    responses={
        201: {"description": "Post liked"},
        404: {"description": "Post not found"},
        409: {"description": "Already liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: LikeService = Depends(get_like_service),
) -> LikeDetailResponse:
    """Like a post once. A second like is rejected."""
    await service.like(post_id, user.id)
    return LikeDetailResponse(
        data=LikeResponse(post_id=post_id, like_count=await service.count_by_post(post_id))
    )


@router.delete(
    "/{post_id}/like",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a like",
    responses={
        204: {"description": "Like removed"},
        404: {"description": "Post not found or not liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: LikeService = Depends(get_like_service),
) -> None:
    await service.unlike(post_id, user.id)
