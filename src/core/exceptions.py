"""Custom exceptions and error codes.

Every domain failure is an ``AppException`` carrying a stable error code and
the HTTP status it maps to. The kind base classes (``NotFoundError``,
``ConflictError`` ...) let callers catch a whole family at once.
"""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    NOT_FOLLOWING = "NOT_FOLLOWING"
    NOT_LIKED = "NOT_LIKED"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    CONTENT_TOO_LONG = "CONTENT_TOO_LONG"
    SELF_FOLLOW = "SELF_FOLLOW"

    # Conflict errors (409)
    EMAIL_TAKEN = "EMAIL_TAKEN"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    ALREADY_FOLLOWING = "ALREADY_FOLLOWING"
    ALREADY_LIKED = "ALREADY_LIKED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# --- Kinds ---


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authenticated, but not allowed to touch the resource."""

    def __init__(self, message: str = "Access denied", details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
            details=details,
        )


class NotFoundError(AppException):
    """Entity or relationship does not exist."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ValidationError(AppException):
    """Input rejected by a domain rule."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class ConflictError(AppException):
    """A unique key is already taken."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


# --- Authentication ---


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Deliberately silent about which half was wrong."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


# --- Not found ---


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            f"User not found: {user_id}",
            {"user_id": user_id},
        )


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.POST_NOT_FOUND,
            f"Post not found: {post_id}",
            {"post_id": post_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            ErrorCode.COMMENT_NOT_FOUND,
            f"Comment not found: {comment_id}",
            {"comment_id": comment_id},
        )


class NotFollowingError(NotFoundError):
    """No follow edge exists for the pair."""

    def __init__(self, followee_id: str) -> None:
        super().__init__(
            ErrorCode.NOT_FOLLOWING,
            "You are not following this user",
            {"followee_id": followee_id},
        )


class NotLikedError(NotFoundError):
    """No like exists for the user/post pair."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.NOT_LIKED,
            "You have not liked this post",
            {"post_id": post_id},
        )


# --- Validation ---


class EmptyContentError(ValidationError):
    """Content is blank after trimming."""

    def __init__(self, field: str = "content") -> None:
        super().__init__(
            f"{field.capitalize()} cannot be empty",
            ErrorCode.EMPTY_CONTENT,
            {"field": field},
        )


class ContentTooLongError(ValidationError):
    """Content exceeds the configured maximum length."""

    def __init__(self, max_length: int, field: str = "content") -> None:
        super().__init__(
            f"{field.capitalize()} exceeds {max_length} characters",
            ErrorCode.CONTENT_TOO_LONG,
            {"field": field, "max_length": max_length},
        )


class SelfFollowError(ValidationError):
    """A user tried to follow themselves."""

    def __init__(self) -> None:
        super().__init__("You cannot follow yourself", ErrorCode.SELF_FOLLOW)


# --- Conflicts ---


class EmailTakenError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            ErrorCode.EMAIL_TAKEN,
            "A user with this email already exists",
            {"email": email},
        )


class UsernameTakenError(ConflictError):
    """Username already registered."""

    def __init__(self, username: str) -> None:
        super().__init__(
            ErrorCode.USERNAME_TAKEN,
            f"Username already taken: {username}",
            {"username": username},
        )


class AlreadyFollowingError(ConflictError):
    """Follow edge already exists."""

    def __init__(self, followee_id: str) -> None:
        super().__init__(
            ErrorCode.ALREADY_FOLLOWING,
            "You are already following this user",
            {"followee_id": followee_id},
        )


class AlreadyLikedError(ConflictError):
    """Like already exists for the user/post pair."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.ALREADY_LIKED,
            "You have already liked this post",
            {"post_id": post_id},
        )


# --- Storage ---


class DuplicateKeyError(Exception):
    """A storage-level unique constraint rejected a write.

    Raised by repositories so services can turn a lost check-then-insert
    race into the same conflict error the pre-check would have produced.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate value for unique key: {key}")
