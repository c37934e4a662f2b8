"""Course library repository.

Data access for authors and their courses. Ordering of the author list is
decided by the caller through a sort specification; this layer only
filters, orders and pages.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Author, Course
from app.shaping.sorting import SortSpecification, apply_sort

if TYPE_CHECKING:
    from app.schemas.author import AuthorResourceParameters


class AuthorNotFoundError(ValueError):
    """Raised when an author is not found."""

    pass


class CourseLibraryRepository:
    """Repository for author and course operations."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        Args:
            db: Async SQLAlchemy session.
        """
        self.db = db

    # === Authors ===

    def _filtered_authors(self, params: AuthorResourceParameters) -> Select[tuple[Author]]:
        """Build the author query with category and search filters applied."""
        query = select(Author)

        if params.main_category and params.main_category.strip():
            query = query.where(Author.main_category == params.main_category.strip())

        if params.search_query and params.search_query.strip():
            term = params.search_query.strip()
            query = query.where(
                or_(
                    Author.main_category.icontains(term, autoescape=True),
                    Author.first_name.icontains(term, autoescape=True),
                    Author.last_name.icontains(term, autoescape=True),
                )
            )

        return query

    async def list_authors(
        self,
        params: AuthorResourceParameters,
        sort_specification: SortSpecification = (),
    ) -> tuple[list[Author], int]:
        """List one page of authors.

        Args:
            params: Filter and paging parameters.
            sort_specification: Ordering over Author fields.

        Returns:
            The authors on the requested page and the total matching count.
        """
        query = self._filtered_authors(params)

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = (
            apply_sort(query, Author, sort_specification)
            .offset((params.page_number - 1) * params.page_size)
            .limit(params.page_size)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def get_author(self, author_id: uuid.UUID) -> Author | None:
        """Get author by ID."""
        return await self.db.get(Author, author_id)

    async def author_exists(self, author_id: uuid.UUID) -> bool:
        """Check whether an author exists."""
        result = await self.db.execute(select(Author.id).where(Author.id == author_id))
        return result.scalar_one_or_none() is not None

    async def add_author(self, author: Author) -> Author:
        """Add a new author (and any attached courses)."""
        self.db.add(author)
        await self.db.flush()
        await self.db.refresh(author)
        return author

    async def delete_author(self, author: Author) -> None:
        """Delete an author together with their courses."""
        await self.db.delete(author)
        await self.db.flush()

    # === Courses ===

    async def list_courses(self, author_id: uuid.UUID) -> list[Course]:
        """List an author's courses ordered by title."""
        result = await self.db.execute(
            select(Course).where(Course.author_id == author_id).order_by(Course.title)
        )
        return list(result.scalars().all())

    async def get_course(self, author_id: uuid.UUID, course_id: uuid.UUID) -> Course | None:
        """Get one of an author's courses."""
        result = await self.db.execute(
            select(Course).where(
                Course.author_id == author_id,
                Course.id == course_id,
            )
        )
        return result.scalar_one_or_none()

    async def course_exists(self, course_id: uuid.UUID) -> bool:
        """Check whether a course ID is taken, under any author."""
        result = await self.db.execute(select(Course.id).where(Course.id == course_id))
        return result.scalar_one_or_none() is not None

    async def add_course(self, author_id: uuid.UUID, course: Course) -> Course:
        """Add a course to an author.

        Raises:
            AuthorNotFoundError: If the author does not exist.
        """
        if not await self.author_exists(author_id):
            raise AuthorNotFoundError(f"Author {author_id} not found")

        course.author_id = author_id
        self.db.add(course)
        await self.db.flush()
        await self.db.refresh(course)
        return course

    async def update_course(self, course: Course) -> Course:
        """Persist changes made to a loaded course."""
        await self.db.flush()
        await self.db.refresh(course)
        return course

    async def delete_course(self, course: Course) -> None:
        """Delete a course."""
        await self.db.delete(course)
        await self.db.flush()
