"""Pagination metadata."""

import json
import math
from dataclasses import dataclass

PAGINATION_HEADER = "X-Pagination"


@dataclass(frozen=True)
class PaginationMetadata:
    """Page position of a collection response.

    ``current_page`` is reported as requested; pages past the end simply
    come back empty from the repository.
    """

    total_count: int
    page_size: int
    current_page: int
    total_pages: int

    @classmethod
    def calculate(cls, total_count: int, page_size: int, current_page: int) -> "PaginationMetadata":
        """Derive total pages from the item count and page size.

        Raises:
            ValueError: If page_size is not positive or current_page is below 1.
        """
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        if current_page < 1:
            raise ValueError("current_page must be >= 1")
        return cls(
            total_count=total_count,
            page_size=page_size,
            current_page=current_page,
            total_pages=math.ceil(total_count / page_size),
        )

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def to_header(self) -> str:
        """Serialize to the compact JSON carried in the X-Pagination header."""
        return json.dumps(
            {
                "totalCount": self.total_count,
                "pageSize": self.page_size,
                "currentPage": self.current_page,
                "totalPages": self.total_pages,
            },
            separators=(",", ":"),
        )
