"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from domain.entities.pagination import Page


class RequestModel(BaseModel):
    """Base for request bodies: unknown fields are rejected, not ignored."""

    model_config = ConfigDict(extra="forbid")


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class PageMeta(BaseModel):
    """Pagination block attached to every list response."""

    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[Any]) -> "PageMeta":
        return cls(
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )
