"""Pydantic schemas for the Course API."""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.base import ApiModel

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1500


class CourseManipulation(ApiModel):
    """Fields shared by course creation and update.

    A course title must differ from its description.
    """

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @model_validator(mode="after")
    def title_differs_from_description(self) -> "CourseManipulation":
        if self.title == self.description:
            raise ValueError("Title must be different from description")
        return self


class CourseCreate(CourseManipulation):
    """Schema for creating a course."""


class CourseUpdate(CourseManipulation):
    """Schema for replacing a course; the description is required."""

    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)


class JsonPatchOperation(BaseModel):
    """A single RFC 6902 JSON Patch operation.

    The patched course is validated as a ``CourseUpdate``.
    """

    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")

    def to_document(self) -> dict[str, Any]:
        """Plain operation dict as sent by the client."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class CourseResponse(ApiModel):
    """Schema for a course in API responses."""

    id: UUID
    title: str
    description: str | None
    author_id: UUID
