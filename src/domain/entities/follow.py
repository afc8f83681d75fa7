"""Follow domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import SelfFollowError


@dataclass
class Follow:
    """Directed follow edge: ``follower_id`` follows ``followee_id``."""

    follower_id: UUID
    followee_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Self-follow edges can never be constructed."""
        if self.follower_id == self.followee_id:
            raise SelfFollowError()


@dataclass(frozen=True, slots=True)
class FollowStats:
    """Read-only value object: follower/following counts for one user."""

    followers: int
    following: int
