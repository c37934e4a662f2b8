"""Data shaping.

Reduces a fully populated response model to the fields a client asked for.
The model stays statically declared; only the serialized payload is
narrowed, so the result is a plain ordered dict.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from app.shaping.fields import declared_fields, validate_fields

ShapedResource = dict[str, Any]


def shape_data(resource: BaseModel, fields: str | None = None) -> ShapedResource:
    """Shape a single resource to the requested fields.

    Args:
        resource: Populated response model.
        fields: Comma-separated field names, matched case-insensitively.
            None or blank returns every declared field.

    Returns:
        JSON-ready dict keyed by declared field names, in declaration order
        when no fields are requested and in request order otherwise.

    Raises:
        InvalidFieldListError: If a requested field is not declared. Field
            lists should be validated with ``type_has_fields`` beforehand.
    """
    representation = type(resource)
    full = resource.model_dump(mode="json", by_alias=True)
    requested = validate_fields(representation, fields)

    if not requested:
        return {name: full[name] for name in declared_fields(representation)}

    shaped: ShapedResource = {}
    for name in requested:
        shaped[name] = full[name]
    return shaped


def shape_collection(resources: Iterable[BaseModel], fields: str | None = None) -> list[ShapedResource]:
    """Shape every resource in a sequence with the same field list."""
    return [shape_data(resource, fields) for resource in resources]
