"""Pydantic schemas for users, profiles and the follow graph."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.common import PageMeta, RequestModel
from domain.entities.profile import Profile
from domain.entities.user import User
from domain.entities.views import ProfileView, UserSummary


class UserSummaryResponse(BaseModel):
    """Public user card."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "ada_l",
                "display_name": "Ada Lovelace",
                "avatar_url": "https://cdn.example.com/avatars/ada.png",
            }
        },
    )

    id: UUID
    username: str
    display_name: str | None = None
    avatar_url: str | None = None

    @classmethod
    def from_summary(cls, summary: UserSummary | None) -> "UserSummaryResponse | None":
        return cls.model_validate(summary) if summary else None


class MeResponse(BaseModel):
    """The authenticated user's own account and profile."""

    id: UUID
    username: str
    email: str
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime

    @classmethod
    def build(cls, user: User, profile: Profile | None) -> "MeResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            display_name=profile.display_name if profile else None,
            bio=profile.bio if profile else None,
            avatar_url=profile.avatar_url if profile else None,
            created_at=user.created_at,
        )


class ProfileUpdate(RequestModel):
    """Schema for editing profile details. Omitted fields stay unchanged."""

    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


class PublicProfileResponse(BaseModel):
    """A user's public profile page."""

    id: UUID
    username: str
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    follower_count: int
    following_count: int
    post_count: int
    is_following: bool | None = None
    created_at: datetime

    @classmethod
    def from_view(cls, view: ProfileView) -> "PublicProfileResponse":
        profile = view.profile
        return cls(
            id=view.user.id,
            username=view.user.username,
            display_name=profile.display_name if profile else None,
            bio=profile.bio if profile else None,
            avatar_url=profile.avatar_url if profile else None,
            follower_count=view.follower_count,
            following_count=view.following_count,
            post_count=view.post_count,
            is_following=view.is_following,
            created_at=view.user.created_at,
        )


class UserListResponse(BaseModel):
    """Paginated list of user cards."""

    data: list[UserSummaryResponse]
    meta: PageMeta


class FollowResponse(BaseModel):
    """Schema for a follow edge."""

    model_config = ConfigDict(from_attributes=True)

    follower_id: UUID
    followee_id: UUID
    created_at: datetime


class MeDetailResponse(BaseModel):
    data: MeResponse


class ProfileDetailResponse(BaseModel):
    data: PublicProfileResponse


class FollowDetailResponse(BaseModel):
    data: FollowResponse
