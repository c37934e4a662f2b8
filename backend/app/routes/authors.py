"""Author API routes.

Collection and detail endpoints support sparse fields (``fields``), sorting
(``orderBy``), paging, and content negotiation through the Accept header:
``application/vnd.courselibrary.author.full+json`` selects the full
representation, and a ``.hateoas`` subtype suffix adds hypermedia links.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.mappers import author_from_create
from app.models import Author
from app.repositories import CourseLibraryRepository
from app.schemas.author import AuthorCreate, AuthorResourceParameters
from app.schemas.link import Link
from app.services.resource_shaper import ShapedCollection
from app.shaping.errors import NotAcceptableError, ShapingError
from app.shaping.links import build_collection_links, build_resource_links, url_for
from app.shaping.mappings import author_shaper
from app.shaping.pagination import PAGINATION_HEADER, PaginationMetadata

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authors", tags=["authors"])

ALLOWED_COLLECTION_METHODS = "GET,OPTIONS,POST"


def author_resource_parameters(
    main_category: str | None = Query(None, alias="mainCategory"),
    search_query: str | None = Query(None, alias="searchQuery"),
    page_number: int = Query(1, ge=1, alias="pageNumber"),
    page_size: int = Query(settings.default_page_size, ge=1, alias="pageSize"),
    order_by: str | None = Query("Name", alias="orderBy"),
    fields: str | None = None,
) -> AuthorResourceParameters:
    """Collect author collection query parameters, capping the page size."""
    return AuthorResourceParameters(
        page_number=page_number,
        page_size=min(page_size, settings.max_page_size),
        order_by=order_by,
        fields=fields,
        main_category=main_category,
        search_query=search_query,
    )


def _rejected(error: ShapingError) -> HTTPException:
    """406 for an unsupported media type, 400 for any other bad input."""
    logger.info("Rejected author request: %s", error)
    if isinstance(error, NotAcceptableError):
        return HTTPException(
            status_code=status.HTTP_406_NOT_ACCEPTABLE,
            detail=str(error),
        )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error),
    )


def create_links_for_author(request: Request, author_id: uuid.UUID, fields: str | None = None) -> list[Link]:
    """Links for a single author; self echoes the requested fields."""
    fields = fields if fields and fields.strip() else None
    return build_resource_links(
        url_for(request, "get_author", {"fields": fields}, author_id=author_id),
        [
            (url_for(request, "delete_author", author_id=author_id), "delete_author", "DELETE"),
            (
                url_for(request, "create_course_for_author", author_id=author_id),
                "create_course_for_author",
                "POST",
            ),
            (url_for(request, "get_courses_for_author", author_id=author_id), "courses", "GET"),
        ],
    )


def create_links_for_authors(
    request: Request,
    params: AuthorResourceParameters,
    pagination: PaginationMetadata,
) -> list[Link]:
    """Self, nextPage and previousPage links carrying the full query."""
    return build_collection_links(
        lambda page_number: url_for(request, "get_authors", params.to_query(page_number)),
        pagination,
    )


@router.api_route("", methods=["GET", "HEAD"], name="get_authors")
async def get_authors(
    request: Request,
    params: AuthorResourceParameters = Depends(author_resource_parameters),
    accept: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """List authors with filtering, sorting, paging and data shaping.

    Pagination metadata is returned in the X-Pagination header. With a
    hypermedia media type the body is ``{"value": [...], "links": [...]}``,
    otherwise a plain array.

    Raises:
        HTTPException: 400 for an unknown sort key, unknown field or
            malformed Accept header. 406 for a media type that is
            not JSON.
    """
    try:
        negotiated = author_shaper.negotiate(accept)
        sort_specification = author_shaper.validate(negotiated, params.order_by, params.fields)
    except ShapingError as e:
        raise _rejected(e)

    repo = CourseLibraryRepository(db)
    authors, total = await repo.list_authors(params, sort_specification)
    pagination = PaginationMetadata.calculate(total, params.page_size, params.page_number)
    headers = {PAGINATION_HEADER: pagination.to_header()}

    if request.method == "HEAD":
        return Response(headers=headers, media_type=negotiated.content_type)

    collection: ShapedCollection = author_shaper.shape_collection(
        negotiated,
        authors,
        params.fields,
        pagination,
        item_links=lambda author: create_links_for_author(request, author.id, params.fields),
        collection_links=lambda page_meta: create_links_for_authors(request, params, page_meta),
    )
    return JSONResponse(
        content=collection.to_body(),
        headers=headers,
        media_type=negotiated.content_type,
    )


@router.options("", name="get_authors_options")
async def get_authors_options() -> Response:
    """Advertise the methods available on the author collection."""
    return Response(headers={"Allow": ALLOWED_COLLECTION_METHODS})


@router.get("/{author_id}", name="get_author")
async def get_author(
    author_id: uuid.UUID,
    request: Request,
    fields: str | None = None,
    accept: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Get a single author in the negotiated representation.

    Raises:
        HTTPException: 400 for invalid fields or Accept header, 406 for a
            media type that is not JSON, 404 if the author does not exist.
    """
    try:
        negotiated = author_shaper.negotiate(accept)
        author_shaper.validate(negotiated, fields=fields)
    except ShapingError as e:
        raise _rejected(e)

    author = await CourseLibraryRepository(db).get_author(author_id)
    if author is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Author not found",
        )

    shaped = author_shaper.shape(
        negotiated,
        author,
        fields,
        create_links_for_author(request, author_id, fields) if negotiated.include_links else None,
    )
    return JSONResponse(content=shaped, media_type=negotiated.content_type)


@router.post("", name="create_author", status_code=status.HTTP_201_CREATED)
async def create_author(
    author_data: AuthorCreate,
    request: Request,
    accept: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Create an author, with optional initial courses.

    Returns:
        The created author with a Location header pointing at it.
    """
    try:
        negotiated = author_shaper.negotiate(accept)
    except ShapingError as e:
        raise _rejected(e)

    author: Author = await CourseLibraryRepository(db).add_author(author_from_create(author_data))
    logger.info("Created author %s with %d courses", author.id, len(author_data.courses))

    shaped = author_shaper.shape(
        negotiated,
        author,
        links=create_links_for_author(request, author.id),
    )
    return JSONResponse(
        content=shaped,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": url_for(request, "get_author", author_id=author.id)},
        media_type=negotiated.content_type,
    )


@router.delete("/{author_id}", name="delete_author", status_code=status.HTTP_204_NO_CONTENT)
async def delete_author(
    author_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete an author and all of their courses.

    Raises:
        HTTPException: 404 if the author does not exist.
    """
    repo = CourseLibraryRepository(db)
    author = await repo.get_author(author_id)

    if author is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Author not found",
        )

    await repo.delete_author(author)
    logger.info("Deleted author %s", author_id)
