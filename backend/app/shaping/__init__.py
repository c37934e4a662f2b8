"""Resource shaping engine.

Sort key mapping, sparse field selection, pagination metadata, hypermedia
links and content negotiation for collection and detail endpoints.
"""

from app.shaping.errors import (
    InvalidFieldListError,
    MalformedMediaTypeError,
    MappingConfigurationError,
    NotAcceptableError,
    ShapingError,
    UnknownSortFieldError,
)
from app.shaping.fields import declared_fields, type_has_fields, validate_fields
from app.shaping.media_types import NegotiatedMediaType, negotiate, parse_media_type
from app.shaping.pagination import PaginationMetadata
from app.shaping.registry import PropertyMappingRegistry, SortFieldMapping
from app.shaping.shaper import shape_collection, shape_data
from app.shaping.sorting import SortClause, apply_sort, build_sort_specification

__all__ = [
    "InvalidFieldListError",
    "MalformedMediaTypeError",
    "MappingConfigurationError",
    "NegotiatedMediaType",
    "NotAcceptableError",
    "PaginationMetadata",
    "PropertyMappingRegistry",
    "ShapingError",
    "SortClause",
    "SortFieldMapping",
    "UnknownSortFieldError",
    "apply_sort",
    "build_sort_specification",
    "declared_fields",
    "negotiate",
    "parse_media_type",
    "shape_collection",
    "shape_data",
    "type_has_fields",
    "validate_fields",
]
