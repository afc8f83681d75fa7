"""Feed and search aggregator.

Builds read models (post cards, user cards, profile pages) from the
repositories without owning any state. Counters are fetched in batches for
the whole page rather than per item.
"""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import (
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.comment import Comment
from domain.entities.pagination import Page, validate_page
from domain.entities.post import Post
from domain.entities.user import User
from domain.entities.views import CommentView, PostView, ProfileView, UserSummary
from domain.repositories.unit_of_work import IUnitOfWork


class FeedService:
    """Read-side composition over users, posts, engagement and the follow graph."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- Posts ---

    async def global_feed(
        self, viewer_id: UUID | None, page: int, limit: int
    ) -> Page[PostView]:
        """Every post, newest first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            posts, total = await uow.posts.list_all(page, limit)
            views = await self._post_views(uow, posts, viewer_id)
        return Page(items=views, total=total, page=page, limit=limit)

    async def user_feed(self, viewer_id: UUID, page: int, limit: int) -> Page[PostView]:
        """Posts by the accounts the viewer follows."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            posts, total = await uow.posts.list_for_follower(viewer_id, page, limit)
            views = await self._post_views(uow, posts, viewer_id)
        return Page(items=views, total=total, page=page, limit=limit)

    async def author_feed(
        self, author_id: UUID, viewer_id: UUID | None, page: int, limit: int
    ) -> Page[PostView]:
        """Posts written by one user."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.users.get(author_id):
                raise UserNotFoundError(str(author_id))
            posts, total = await uow.posts.list_by_author(author_id, page, limit)
            views = await self._post_views(uow, posts, viewer_id)
        return Page(items=views, total=total, page=page, limit=limit)

    async def post_detail(self, post_id: UUID, viewer_id: UUID | None) -> PostView:
        """A single post card."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            views = await self._post_views(uow, [post], viewer_id)
        return views[0]

    async def post_comments(
        self, post_id: UUID, page: int, limit: int
    ) -> Page[CommentView]:
        """Comments on a post with their author cards, oldest first."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.posts.get(post_id):
                raise PostNotFoundError(str(post_id))
            comments, total = await uow.comments.list_by_post(post_id, page, limit)
            views = await self._comment_views(uow, comments)
        return Page(items=views, total=total, page=page, limit=limit)

    async def comment_detail(self, comment_id: UUID) -> CommentView:
        """A single comment with its author card."""
        async with self._uow_factory() as uow:
            comment = await uow.comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            views = await self._comment_views(uow, [comment])
        return views[0]

    # --- Users ---

    async def search_users(self, query: str, page: int, limit: int) -> Page[UserSummary]:
        """Search by username, topped up with display-name matches.

        When the username page comes back short, the remainder is filled from
        profiles whose display name matches, skipping users already listed.
        ``total`` is the sum of both sources' totals and therefore an upper
        bound: a user matching on both counts twice.
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query cannot be empty", details={"field": "q"})
        validate_page(page, limit)

        async with self._uow_factory() as uow:
            users, total = await uow.users.search_by_username(query, page, limit)
            results = list(users)

            if len(results) < limit:
                remaining = limit - len(results)
                user_ids, display_total = await uow.profiles.search_by_display_name(
                    query, page, remaining
                )
                total += display_total

                seen = {user.id for user in results}
                missing = [uid for uid in user_ids if uid not in seen]
                found = await uow.users.get_many(missing)
                results.extend(found[uid] for uid in missing if uid in found)

            summaries = await self._summaries(uow, results)
        return Page(items=summaries, total=total, page=page, limit=limit)

    async def followers(self, user_id: UUID, page: int, limit: int) -> Page[UserSummary]:
        """User cards for everyone following ``user_id``."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            users, total = await uow.follows.list_followers(user_id, page, limit)
            summaries = await self._summaries(uow, users)
        return Page(items=summaries, total=total, page=page, limit=limit)

    async def following(self, user_id: UUID, page: int, limit: int) -> Page[UserSummary]:
        """User cards for everyone ``user_id`` follows."""
        validate_page(page, limit)
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            users, total = await uow.follows.list_following(user_id, page, limit)
            summaries = await self._summaries(uow, users)
        return Page(items=summaries, total=total, page=page, limit=limit)

    async def profile_page(self, username: str, viewer_id: UUID | None) -> ProfileView:
        """Public profile with counters; ``is_following`` only for other viewers."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_username(username)
            if not user:
                raise UserNotFoundError(username)

            is_following = None
            if viewer_id is not None and viewer_id != user.id:
                is_following = await uow.follows.get(viewer_id, user.id) is not None

            return ProfileView(
                user=user,
                profile=await uow.profiles.get_for_user(user.id),
                follower_count=await uow.follows.count_followers(user.id),
                following_count=await uow.follows.count_following(user.id),
                post_count=await uow.posts.count_by_author(user.id),
                is_following=is_following,
            )

    # --- Composition helpers ---

    async def _summaries(self, uow: IUnitOfWork, users: list[User]) -> list[UserSummary]:
        profiles = await uow.profiles.get_for_users([user.id for user in users])
        return [UserSummary.from_user(user, profiles.get(user.id)) for user in users]

    async def _post_views(
        self, uow: IUnitOfWork, posts: list[Post], viewer_id: UUID | None
    ) -> list[PostView]:
        if not posts:
            return []

        post_ids = [post.id for post in posts]
        author_ids = list({post.author_id for post in posts})

        authors = await uow.users.get_many(author_ids)
        profiles = await uow.profiles.get_for_users(author_ids)
        like_counts = await uow.likes.count_by_posts(post_ids)
        comment_counts = await uow.comments.count_by_posts(post_ids)
        liked: set[UUID] = set()
        if viewer_id is not None:
            liked = await uow.likes.liked_post_ids(viewer_id, post_ids)

        views = []
        for post in posts:
            author = authors.get(post.author_id)
            views.append(
                PostView(
                    post=post,
                    author=(
                        UserSummary.from_user(author, profiles.get(author.id))
                        if author
                        else None
                    ),
                    like_count=like_counts.get(post.id, 0),
                    comment_count=comment_counts.get(post.id, 0),
                    viewer_has_liked=post.id in liked,
                )
            )
        return views

    async def _comment_views(
        self, uow: IUnitOfWork, comments: list[Comment]
    ) -> list[CommentView]:
        if not comments:
            return []

        author_ids = list({comment.author_id for comment in comments})
        authors = await uow.users.get_many(author_ids)
        profiles = await uow.profiles.get_for_users(author_ids)
        return [
            CommentView(
                comment=comment,
                author=(
                    UserSummary.from_user(authors[comment.author_id], profiles.get(comment.author_id))
                    if comment.author_id in authors
                    else None
                ),
            )
            for comment in comments
        ]
