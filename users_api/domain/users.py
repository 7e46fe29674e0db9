"""Domain rules for user records (status values, page size clamp)."""
from __future__ import annotations

from enum import Enum

from users_api.core.errors import ValidationError

MAX_PAGE_SIZE = 50


class ActiveStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def effective_limit(limit: int) -> int:
    """Clamp a requested page size to MAX_PAGE_SIZE."""
    return limit if limit < MAX_PAGE_SIZE else MAX_PAGE_SIZE


def require_text(value: str | None, field: str) -> str:
    """Return the value unchanged, raising when it is missing or only whitespace."""
    if not (value or "").strip():
        raise ValidationError(f"{field} is required")
    return value
