"""Profile domain entity."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from core.exceptions import ValidationError

PROFILE_FIELD_LIMITS = {
    "display_name": 100,
    "bio": 500,
    "avatar_url": 500,
}


@dataclass
class Profile:
    """Domain entity for the optional public details of a user (1:1 with User)."""

    user_id: UUID
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def update_details(self, changes: Mapping[str, str | None]) -> None:
        """Apply only the supplied fields. Blank strings clear a field."""
        for name, value in changes.items():
            if name not in PROFILE_FIELD_LIMITS:
                raise ValidationError(f"Unknown profile field: {name}", details={"field": name})
            if value is not None:
                value = value.strip() or None
            if value is not None and len(value) > PROFILE_FIELD_LIMITS[name]:
                raise ValidationError(
                    f"{name} exceeds {PROFILE_FIELD_LIMITS[name]} characters",
                    details={"field": name, "max_length": PROFILE_FIELD_LIMITS[name]},
                )
            setattr(self, name, value)
        self.updated_at = datetime.utcnow()
