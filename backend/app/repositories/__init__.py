"""Repository layer for data access.

Repositories encapsulate database operations and provide a clean interface
for CRUD operations on domain objects.
"""

from app.repositories.course_library import AuthorNotFoundError, CourseLibraryRepository

__all__ = ["AuthorNotFoundError", "CourseLibraryRepository"]
