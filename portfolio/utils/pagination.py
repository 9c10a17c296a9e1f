"""
Pagination Utility Module

Page arithmetic and the pagination block shared by every list endpoint.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from portfolio.core.config import settings
from portfolio.core.exceptions import ValidationError

# Largest OFFSET a signed 64-bit database integer can hold
MAX_OFFSET = 2 ** 63 - 1


def compute_offset(page: int, limit: int) -> int:
    """Row offset of the first item on a 1-indexed page"""
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def validate_paging(page: int, limit: int) -> None:
    """Reject out-of-range paging before any query is issued"""
    if not isinstance(page, int) or page < 1:
        raise ValidationError("page must be a positive integer", field="page")
    if not isinstance(limit, int) or not 1 <= limit <= settings.MAX_PAGE_SIZE:
        raise ValidationError(
            f"limit must be between 1 and {settings.MAX_PAGE_SIZE}", field="limit"
        )
    if compute_offset(page, limit) > MAX_OFFSET:
        raise ValidationError("page is too large", field="page")


@dataclass
class Page:
    """One page of results plus the size of the whole filtered set"""
    items: List[Any]
    page: int
    limit: int
    total: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = total_pages(self.total, self.limit)

    def pagination(self) -> Dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }

    def to_response(self, key: str, serializer=None) -> Dict[str, Any]:
        """
        Render as ``{key: [...], "pagination": {...}}``.

        Args:
            key: Plural resource name used by the client (e.g. "projects")
            serializer: Optional callable applied to each item
        """
        items = [serializer(item) for item in self.items] if serializer else list(self.items)
        return {key: items, "pagination": self.pagination()}
