"""Conversions between SQLAlchemy entities and API schemas."""

from app.models import Author, Course
from app.schemas.author import AuthorCreate, AuthorFullResponse, AuthorResponse
from app.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from app.utils.dates import get_current_age


def author_to_response(author: Author) -> AuthorResponse:
    """Convert an Author to the friendly representation."""
    return AuthorResponse(
        id=author.id,
        name=f"{author.first_name} {author.last_name}",
        age=get_current_age(author.date_of_birth),
        main_category=author.main_category,
    )


def author_to_full_response(author: Author) -> AuthorFullResponse:
    """Convert an Author to the full representation."""
    return AuthorFullResponse.model_validate(author)


def author_from_create(author_data: AuthorCreate) -> Author:
    """Build a new Author, with its courses, from creation data."""
    return Author(
        first_name=author_data.first_name,
        last_name=author_data.last_name,
        date_of_birth=author_data.date_of_birth,
        main_category=author_data.main_category,
        courses=[course_from_create(course) for course in author_data.courses],
    )


def course_to_response(course: Course) -> CourseResponse:
    """Convert a Course to its API representation."""
    return CourseResponse.model_validate(course)


def course_from_create(course_data: CourseCreate | CourseUpdate) -> Course:
    """Build a new Course from creation or update data."""
    return Course(title=course_data.title, description=course_data.description)
