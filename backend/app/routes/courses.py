"""Course API routes.

Courses are nested under their author. PUT and PATCH upsert: updating a
course that does not exist creates it with the given ID. PATCH takes a JSON
Patch document (RFC 6902).
"""

import logging
import uuid

import jsonpatch
import jsonpointer
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.mappers import course_from_create, course_to_response
from app.models import Course
from app.repositories import CourseLibraryRepository
from app.schemas.course import CourseCreate, CourseResponse, CourseUpdate, JsonPatchOperation
from app.shaping.links import url_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authors/{author_id}/courses", tags=["courses"])


async def _require_author(repo: CourseLibraryRepository, author_id: uuid.UUID) -> None:
    if not await repo.author_exists(author_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Author not found",
        )


def _unprocessable(errors: list[dict]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=errors,
    )


def _created(request: Request, course: Course) -> JSONResponse:
    """201 response for a new course with a Location header."""
    return JSONResponse(
        content=jsonable_encoder(course_to_response(course), by_alias=True),
        status_code=status.HTTP_201_CREATED,
        headers={
            "Location": url_for(
                request,
                "get_course_for_author",
                author_id=course.author_id,
                course_id=course.id,
            )
        },
    )


async def _upsert(
    request: Request,
    repo: CourseLibraryRepository,
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    course_data: CourseUpdate,
) -> Response:
    """Apply validated update data to a course, creating it when missing."""
    course = await repo.get_course(author_id, course_id)

    if course is None:
        if await repo.course_exists(course_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Course ID belongs to another author",
            )
        course = course_from_create(course_data)
        course.id = course_id
        course = await repo.add_course(author_id, course)
        logger.info("Upserted course %s for author %s", course_id, author_id)
        return _created(request, course)

    course.title = course_data.title
    course.description = course_data.description
    await repo.update_course(course)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", name="get_courses_for_author", response_model=list[CourseResponse])
async def get_courses_for_author(
    author_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[CourseResponse]:
    """List an author's courses.

    Raises:
        HTTPException: 404 if the author does not exist.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)

    courses = await repo.list_courses(author_id)
    return [course_to_response(course) for course in courses]


@router.get("/{course_id}", name="get_course_for_author", response_model=CourseResponse)
async def get_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> CourseResponse:
    """Get one of an author's courses.

    Raises:
        HTTPException: 404 if the author or course does not exist.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)

    course = await repo.get_course(author_id, course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found",
        )

    return course_to_response(course)


@router.post("", name="create_course_for_author", status_code=status.HTTP_201_CREATED)
async def create_course_for_author(
    author_id: uuid.UUID,
    course_data: CourseCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Create a course for an author.

    Raises:
        HTTPException: 404 if the author does not exist.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)

    course = await repo.add_course(author_id, course_from_create(course_data))
    logger.info("Created course %s for author %s", course.id, author_id)
    return _created(request, course)


@router.put(
    "/{course_id}",
    name="update_course_for_author",
    responses={201: {"model": CourseResponse}, 204: {"description": "Course updated"}},
)
async def update_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    course_data: CourseUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Replace a course, or create it with this ID if it does not exist.

    Returns:
        204 when an existing course was updated, 201 with the course when
        it was created.

    Raises:
        HTTPException: 404 if the author does not exist, 409 if the course ID
            belongs to another author.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)
    return await _upsert(request, repo, author_id, course_id, course_data)


@router.patch(
    "/{course_id}",
    name="partially_update_course_for_author",
    responses={201: {"model": CourseResponse}, 204: {"description": "Course updated"}},
)
async def partially_update_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    operations: list[JsonPatchOperation],
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Apply a JSON Patch document to a course, creating it if it does not exist.

    Operations run against the course as a ``CourseUpdate`` document (an
    empty one for a new course); the patched document must pass the same
    validation as a full update.

    Raises:
        HTTPException: 422 if an operation cannot be applied or the patched
            course is invalid. 409 if the course ID belongs to another
            author.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)

    course = await repo.get_course(author_id, course_id)
    document = {"title": None, "description": None}
    if course is not None:
        document = {"title": course.title, "description": course.description}

    try:
        patched = jsonpatch.apply_patch(document, [operation.to_document() for operation in operations])
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as e:
        raise _unprocessable([{"loc": ["body"], "msg": str(e), "type": "json_patch"}])

    unknown = sorted(set(patched) - set(document)) if isinstance(patched, dict) else ["/"]
    if unknown:
        raise _unprocessable(
            [{"loc": ["body", name], "msg": "Unknown course field", "type": "json_patch"} for name in unknown]
        )

    try:
        course_data = CourseUpdate.model_validate(patched)
    except ValidationError as e:
        raise _unprocessable(
            [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]
        )

    return await _upsert(request, repo, author_id, course_id, course_data)


@router.delete("/{course_id}", name="delete_course_for_author", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a course.

    Raises:
        HTTPException: 404 if the author or course does not exist.
    """
    repo = CourseLibraryRepository(db)
    await _require_author(repo, author_id)

    course = await repo.get_course(author_id, course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found",
        )

    await repo.delete_course(course)
