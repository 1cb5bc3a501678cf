# school_admin/utils/pagination.py
"""Offset/limit pagination over in-memory collections."""
from typing import List, Sequence, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar('T')

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def validate_window(offset: int, limit: int) -> None:
        """Reject windows that start before the first item or hold nothing."""
        if offset < 0 or limit < 1:
            raise ValidationError("Offset must be >= 0 and limit must be >= 1")

    @staticmethod
    def slice(items: Sequence[T], offset: int, limit: int) -> List[T]:
        """Return items[offset:offset + limit]; an offset past the end yields []."""
        return list(items[offset:offset + limit])
