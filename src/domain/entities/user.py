"""User domain entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import ValidationError

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,30}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
# Path segments under /users that would shadow a profile URL.
RESERVED_USERNAMES = frozenset({"search"})


def normalize_email(email: str) -> str:
    """Emails compare case-insensitively; store them lower-cased."""
    return email.strip().lower()


def validate_password(password: str) -> None:
    """Reject passwords that are too short to hash."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            details={"field": "password"},
        )


@dataclass
class User:
    """Domain entity for an account.

    ``password_hash`` is kept out of ``repr`` and never leaves the
    identity layer; API schemas have no field for it.
    """

    username: str
    email: str
    password_hash: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(cls, username: str, email: str, password_hash: str) -> "User":
        """Build a validated new user."""
        username = username.strip()
        if not USERNAME_PATTERN.match(username):
            raise ValidationError(
                "Username must be 3-30 characters of letters, digits or underscores",
                details={"field": "username"},
            )
        if username.lower() in RESERVED_USERNAMES:
            raise ValidationError(
                f"Username '{username}' is reserved", details={"field": "username"}
            )

        email = normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Valid email is required", details={"field": "email"})

        return cls(username=username, email=email, password_hash=password_hash)
