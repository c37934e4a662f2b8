"""Sort mapping and representation variant declarations.

Importing this module registers the author sort mappings, so the registry
is populated before the first request is served, and builds
``author_shaper`` used by the author routes.
"""

from app.config import settings
from app.mappers import author_to_full_response, author_to_response
from app.models import Author
from app.schemas.author import AuthorFullResponse, AuthorResponse
from app.services.resource_shaper import ResourceShaper
from app.shaping.registry import PropertyMappingRegistry, SortFieldMapping

AUTHOR_SORT_MAPPINGS = (
    SortFieldMapping("Id", ("id",)),
    SortFieldMapping("MainCategory", ("main_category",)),
    # Older authors have earlier birth dates, so age sorts the other way
    SortFieldMapping("Age", ("date_of_birth",), reverse=True),
    SortFieldMapping("Name", ("first_name", "last_name")),
)

AUTHOR_FULL_SORT_MAPPINGS = (
    SortFieldMapping("Id", ("id",)),
    SortFieldMapping("FirstName", ("first_name",)),
    SortFieldMapping("LastName", ("last_name",)),
    SortFieldMapping("DateOfBirth", ("date_of_birth",)),
    SortFieldMapping("MainCategory", ("main_category",)),
    SortFieldMapping("Name", ("first_name", "last_name")),
)

AUTHOR_FULL_MEDIA_TYPE = f"{settings.media_type_vendor}.author.full"
AUTHOR_FRIENDLY_MEDIA_TYPE = f"{settings.media_type_vendor}.author.friendly"

AUTHOR_VARIANTS: dict[str, type[AuthorResponse] | type[AuthorFullResponse]] = {
    AUTHOR_FULL_MEDIA_TYPE: AuthorFullResponse,
    AUTHOR_FRIENDLY_MEDIA_TYPE: AuthorResponse,
}


def register_author_mappings() -> None:
    """Register the sort mappings of both author representations."""
    PropertyMappingRegistry.register(AuthorResponse, Author, AUTHOR_SORT_MAPPINGS)
    PropertyMappingRegistry.register(AuthorFullResponse, Author, AUTHOR_FULL_SORT_MAPPINGS)


register_author_mappings()

author_shaper: ResourceShaper[Author] = ResourceShaper(
    entity=Author,
    variants=AUTHOR_VARIANTS,
    default=AuthorResponse,
    converters={
        AuthorResponse: author_to_response,
        AuthorFullResponse: author_to_full_response,
    },
)
