"""Pydantic schemas."""

from app.schemas.author import (
    AuthorCreate,
    AuthorFullResponse,
    AuthorResourceParameters,
    AuthorResponse,
)
from app.schemas.course import (
    CourseCreate,
    CourseResponse,
    CourseUpdate,
    JsonPatchOperation,
)
from app.schemas.link import Link

__all__ = [
    # Author schemas
    "AuthorCreate",
    "AuthorFullResponse",
    "AuthorResourceParameters",
    "AuthorResponse",
    # Course schemas
    "CourseCreate",
    "CourseResponse",
    "CourseUpdate",
    "JsonPatchOperation",
    "Link",
]
