"""Pydantic schemas for the Author API.

Authors have two output representations: the default ``AuthorResponse``
(combined name and computed age) and ``AuthorFullResponse`` (the stored
fields as-is), selected through content negotiation.
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from pydantic import Field

from app.schemas.base import ApiModel
from app.schemas.course import CourseCreate


class AuthorResponse(ApiModel):
    """Friendly author representation."""

    id: UUID
    name: str
    age: int
    main_category: str


class AuthorFullResponse(ApiModel):
    """Full author representation."""

    id: UUID
    first_name: str
    last_name: str
    date_of_birth: date
    main_category: str


class AuthorCreate(ApiModel):
    """Schema for creating an author, optionally with initial courses."""

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    date_of_birth: date
    main_category: str = Field(min_length=1, max_length=50)
    courses: list[CourseCreate] = Field(default_factory=list)


@dataclass
class AuthorResourceParameters:
    """Query parameters of the author collection."""

    page_number: int = 1
    page_size: int = 10
    order_by: str | None = "Name"
    fields: str | None = None
    main_category: str | None = None
    search_query: str | None = None

    def to_query(self, page_number: int | None = None) -> dict[str, str | int | None]:
        """Query parameters reproducing this request, optionally for another page."""
        return {
            "fields": self.fields,
            "orderBy": self.order_by,
            "pageNumber": self.page_number if page_number is None else page_number,
            "pageSize": self.page_size,
            "mainCategory": self.main_category,
            "searchQuery": self.search_query,
        }
