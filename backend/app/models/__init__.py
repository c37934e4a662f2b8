"""SQLAlchemy models."""

from app.models.author import Author
from app.models.course import Course

__all__ = [
    "Author",
    "Course",
]
