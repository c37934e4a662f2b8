"""Sort specification building and application.

Turns a client orderBy string into a multi-key sort specification over
backing entity fields, and applies that specification to a SQLAlchemy
select.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, asc, desc

from app.shaping.errors import UnknownSortFieldError
from app.shaping.registry import MappingTable, parse_order_by


@dataclass(frozen=True)
class SortClause:
    """Single ordering step over a backing field."""

    backing_field: str
    descending: bool = False


SortSpecification = tuple[SortClause, ...]


def build_sort_specification(order_by: str | None, mapping: MappingTable) -> SortSpecification:
    """Build a multi-key sort specification from an orderBy string.

    Clauses keep the client's left-to-right precedence: the backing fields
    of the first clause sort first. Each backing field takes the clause's
    direction, inverted when the mapping is marked ``reverse``.

    Args:
        order_by: Raw orderBy value, e.g. ``"name desc, age"``.
        mapping: Mapping table of the representation being sorted.

    Returns:
        Sort clauses; empty when order_by is blank.

    Raises:
        UnknownSortFieldError: If a clause names a key without a mapping.
    """
    specification: list[SortClause] = []
    for public_key, descending in parse_order_by(order_by):
        field_mapping = mapping.lookup(public_key)
        if field_mapping is None:
            raise UnknownSortFieldError(public_key)

        effective_descending = descending != field_mapping.reverse
        specification.extend(
            SortClause(backing_field=backing_field, descending=effective_descending)
            for backing_field in field_mapping.backing_fields
        )
    return tuple(specification)


def order_by_expressions(model: type, specification: SortSpecification) -> list[Any]:
    """Translate a sort specification into SQLAlchemy order-by expressions."""
    return [
        desc(getattr(model, clause.backing_field))
        if clause.descending
        else asc(getattr(model, clause.backing_field))
        for clause in specification
    ]


def apply_sort(query: Select, model: type, specification: SortSpecification) -> Select:
    """Apply a sort specification to a select, leaving it unchanged when empty."""
    if not specification:
        return query
    return query.order_by(*order_by_expressions(model, specification))
