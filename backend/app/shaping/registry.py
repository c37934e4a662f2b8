"""Sort mapping registry.

Maps the public, client-facing sort keys of a representation (e.g. ``Name``
on ``AuthorResponse``) to the backing entity fields they order by (e.g.
``first_name`` then ``last_name`` on ``Author``). Tables are registered once
at startup and are read-only afterwards.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from app.shaping.errors import MappingConfigurationError

logger = logging.getLogger(__name__)

DESCENDING_SUFFIX = " desc"


@dataclass(frozen=True)
class SortFieldMapping:
    """Maps a public sort key to one or more backing fields.

    Args:
        public_key: Sort key as exposed to clients (e.g. 'Name').
        backing_fields: Entity attribute names, in sort precedence order.
        reverse: Invert the requested direction for every backing field.
    """

    public_key: str
    backing_fields: tuple[str, ...]
    reverse: bool = False

    def __post_init__(self) -> None:
        if not self.backing_fields:
            raise MappingConfigurationError(
                f"Sort key '{self.public_key}' must map to at least one backing field"
            )
        if isinstance(self.backing_fields, str):
            raise MappingConfigurationError(
                f"Backing fields for '{self.public_key}' must be a sequence, not a string"
            )
        object.__setattr__(self, "backing_fields", tuple(self.backing_fields))


@dataclass(frozen=True)
class MappingTable:
    """Immutable sort mapping table for one representation/entity pair."""

    representation: type
    entity: type
    entries: Mapping[str, SortFieldMapping] = field(default_factory=dict)

    def lookup(self, sort_key: str) -> SortFieldMapping | None:
        """Find the mapping for a public sort key, ignoring case and padding."""
        return self.entries.get(sort_key.strip().lower())

    def __contains__(self, sort_key: str) -> bool:
        return self.lookup(sort_key) is not None


def parse_order_by(order_by: str | None) -> list[tuple[str, bool]]:
    """Split an orderBy string into ``(public_key, descending)`` clauses.

    Each comma-separated clause is trimmed; a trailing ``" desc"`` marks it
    descending, and the key is everything before the first space. Blank input
    yields no clauses.

    Args:
        order_by: Raw value such as ``"mainCategory, name desc"``.

    Returns:
        Clauses in the order the client supplied them.
    """
    if order_by is None or not order_by.strip():
        return []

    clauses = []
    for raw_clause in order_by.split(","):
        clause = raw_clause.strip()
        descending = clause.endswith(DESCENDING_SUFFIX)
        public_key = clause.split(" ", 1)[0]
        clauses.append((public_key, descending))
    return clauses


# Module-level storage (not class-level to avoid shared mutable state)
_mapping_tables: dict[tuple[type, type], MappingTable] = {}


class PropertyMappingRegistry:
    """Registry of sort mapping tables keyed by (representation, entity) type."""

    @classmethod
    def register(
        cls,
        representation: type,
        entity: type,
        mappings: Iterable[SortFieldMapping],
    ) -> MappingTable:
        """Register the sort mapping table for a representation/entity pair.

        Args:
            representation: Response schema the sort keys are exposed on.
            entity: SQLAlchemy model the backing fields belong to.
            mappings: Sort key declarations.

        Returns:
            The registered, read-only table.

        Raises:
            MappingConfigurationError: If a backing field is not an attribute
                of the entity or a public key is declared twice.
        """
        entries: dict[str, SortFieldMapping] = {}
        for mapping in mappings:
            key = mapping.public_key.strip().lower()
            if key in entries:
                raise MappingConfigurationError(
                    f"Duplicate sort key '{mapping.public_key}' for {representation.__name__}"
                )
            for backing_field in mapping.backing_fields:
                if not hasattr(entity, backing_field):
                    raise MappingConfigurationError(
                        f"{entity.__name__} has no field '{backing_field}' "
                        f"(mapped from '{mapping.public_key}')"
                    )
            entries[key] = mapping

        table = MappingTable(
            representation=representation,
            entity=entity,
            entries=MappingProxyType(entries),
        )
        _mapping_tables[(representation, entity)] = table
        logger.info(
            "Registered %d sort mappings for %s -> %s",
            len(entries),
            representation.__name__,
            entity.__name__,
        )
        return table

    @classmethod
    def get_mapping(cls, representation: type, entity: type) -> MappingTable:
        """Get the mapping table for a representation/entity pair.

        Raises:
            MappingConfigurationError: If no table was registered.
        """
        table = _mapping_tables.get((representation, entity))
        if table is None:
            raise MappingConfigurationError(
                f"Cannot find sort mapping for {representation.__name__} -> {entity.__name__}"
            )
        return table

    @classmethod
    def lookup(cls, representation: type, entity: type, sort_key: str) -> SortFieldMapping | None:
        """Look up a single public sort key."""
        return cls.get_mapping(representation, entity).lookup(sort_key)

    @classmethod
    def valid_mapping(cls, representation: type, entity: type, order_by: str | None) -> bool:
        """Check that every clause of an orderBy string has a mapping.

        Absent or blank input is valid: no sort was requested.
        """
        table = cls.get_mapping(representation, entity)
        for public_key, _ in parse_order_by(order_by):
            if public_key not in table:
                logger.debug("Rejected sort key %r for %s", public_key, representation.__name__)
                return False
        return True

    @classmethod
    def has_mapping(cls, representation: type, entity: type) -> bool:
        """Check if a table is registered for the pair."""
        return (representation, entity) in _mapping_tables

