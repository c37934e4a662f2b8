"""Declared field tables and requested field validation.

A representation's public field names are its pydantic field aliases
(the camelCase names clients see on the wire), in declaration order.
"""

import logging

from pydantic import BaseModel

from app.shaping.errors import InvalidFieldListError

logger = logging.getLogger(__name__)

# Populated lazily, one complete tuple per representation type
_declared_fields: dict[type[BaseModel], tuple[str, ...]] = {}


def declared_fields(representation: type[BaseModel]) -> tuple[str, ...]:
    """Return the public field names declared on a representation.

    Args:
        representation: Pydantic response model.

    Returns:
        Field names as serialized (alias when set), in declaration order.
    """
    names = _declared_fields.get(representation)
    if names is None:
        names = tuple(
            info.serialization_alias or info.alias or name
            for name, info in representation.model_fields.items()
        )
        _declared_fields[representation] = names
    return names


def parse_fields(fields: str | None) -> list[str]:
    """Split a comma-separated field list into trimmed names.

    Blank entries are dropped; an absent or blank list means all fields.
    """
    if fields is None:
        return []
    return [name.strip() for name in fields.split(",") if name.strip()]


def resolve_field(representation: type[BaseModel], requested: str) -> str | None:
    """Match a requested field name to its declared name, ignoring case."""
    wanted = requested.strip().lower()
    for name in declared_fields(representation):
        if name.lower() == wanted:
            return name
    return None


def validate_fields(representation: type[BaseModel], fields: str | None) -> list[str]:
    """Resolve a comma-separated field list to declared names.

    Raises:
        InvalidFieldListError: On the first name that is not declared.
    """
    resolved = []
    for requested in parse_fields(fields):
        declared = resolve_field(representation, requested)
        if declared is None:
            logger.debug("Rejected field %r for %s", requested, representation.__name__)
            raise InvalidFieldListError(requested, representation)
        resolved.append(declared)
    return resolved


def type_has_fields(representation: type[BaseModel], fields: str | None) -> bool:
    """Check that every field in a comma-separated list is declared.

    No partial acceptance: a single unknown name invalidates the list.
    """
    try:
        validate_fields(representation, fields)
    except InvalidFieldListError:
        return False
    return True
