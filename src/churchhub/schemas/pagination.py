"""Pagination schemas for cursor-based pagination."""

import base64
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

T = TypeVar("T")

_CURSOR_SEPARATOR = "|"


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response with cursor-based pagination.

    The cursor is an opaque string that encodes the position in the result set.
    Clients should treat it as an opaque token and pass it back to get the next page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(created_at: datetime, id: UUID) -> str:
    """Encode a (created_at, id) keyset position to base64."""
    raw = f"{created_at.isoformat()}{_CURSOR_SEPARATOR}{id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Decode a base64 cursor back to its keyset position.

    Raises:
        ValueError: If cursor is invalid
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        created_at, id = raw.split(_CURSOR_SEPARATOR, 1)
        return datetime.fromisoformat(created_at), UUID(id)
    except Exception as e:
        raise ValueError("Invalid cursor") from e
