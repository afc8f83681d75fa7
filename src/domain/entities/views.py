"""Read models assembled by the feed aggregator.

Counts and viewer flags are computed per request and never stored on the
underlying entities.
"""

from dataclasses import dataclass
from uuid import UUID

from domain.entities.comment import Comment
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.entities.user import User


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Public card for a user: identity plus display details."""

    id: UUID
    username: str
    display_name: str | None = None
    avatar_url: str | None = None

    @classmethod
    def from_user(cls, user: User, profile: Profile | None = None) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            display_name=profile.display_name if profile else None,
            avatar_url=profile.avatar_url if profile else None,
        )


@dataclass(frozen=True, slots=True)
class PostView:
    """A post with its author card and engagement counters."""

    post: Post
    author: UserSummary | None
    like_count: int
    comment_count: int
    viewer_has_liked: bool


@dataclass(frozen=True, slots=True)
class CommentView:
    """A comment with its author card."""

    comment: Comment
    author: UserSummary | None


@dataclass(frozen=True, slots=True)
class ProfileView:
    """A user's public profile page."""

    user: User
    profile: Profile | None
    follower_count: int
    following_count: int
    post_count: int
    is_following: bool | None = None
