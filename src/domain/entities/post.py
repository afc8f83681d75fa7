"""Post domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import ContentTooLongError, EmptyContentError, ValidationError

DEFAULT_MAX_POST_LENGTH = 2000
DEFAULT_MAX_ATTACHMENTS = 4


def clean_content(content: str, max_length: int, field_name: str = "content") -> str:
    """Trim content and enforce the non-empty / maximum-length rules."""
    cleaned = (content or "").strip()
    if not cleaned:
        raise EmptyContentError(field_name)
    if len(cleaned) > max_length:
        raise ContentTooLongError(max_length, field_name)
    return cleaned


def clean_attachments(
    attachments: list[str] | None, max_attachments: int
) -> list[str] | None:
    """Drop blank entries; an empty list is stored as no attachments."""
    if not attachments:
        return None
    cleaned = [uri.strip() for uri in attachments if uri and uri.strip()]
    if len(cleaned) > max_attachments:
        raise ValidationError(
            f"A post can carry at most {max_attachments} attachments",
            details={"field": "attachments", "max_items": max_attachments},
        )
    return cleaned or None


@dataclass
class Post:
    """Domain entity for a Post. Content is never empty."""

    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    attachments: list[str] | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        author_id: UUID,
        content: str,
        attachments: list[str] | None = None,
        *,
        max_length: int = DEFAULT_MAX_POST_LENGTH,
        max_attachments: int = DEFAULT_MAX_ATTACHMENTS,
    ) -> "Post":
        """Build a validated new post."""
        return cls(
            author_id=author_id,
            content=clean_content(content, max_length),
            attachments=clean_attachments(attachments, max_attachments),
        )

    def update_content(self, content: str, *, max_length: int = DEFAULT_MAX_POST_LENGTH) -> None:
        self.content = clean_content(content, max_length)
        self.updated_at = datetime.utcnow()

    def update_attachments(
        self,
        attachments: list[str] | None,
        *,
        max_attachments: int = DEFAULT_MAX_ATTACHMENTS,
    ) -> None:
        self.attachments = clean_attachments(attachments, max_attachments)
        self.updated_at = datetime.utcnow()

    def can_be_modified_by(self, user_id: UUID) -> bool:
        """Only the author may edit or delete a post."""
        return self.author_id == user_id
