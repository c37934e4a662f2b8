"""Negotiated resource shaping.

Ties the shaping engine together for one entity type: negotiates the
representation variant, validates sort and field input before any query
runs, then converts, shapes and links entities for the response body.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from app.schemas.link import Link
from app.shaping.fields import validate_fields
from app.shaping.links import LINKS_KEY, attach_links
from app.shaping.media_types import NegotiatedMediaType, negotiate
from app.shaping.pagination import PaginationMetadata
from app.shaping.registry import PropertyMappingRegistry
from app.shaping.shaper import ShapedResource, shape_data
from app.shaping.sorting import SortSpecification, build_sort_specification

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class ShapedCollection:
    """A shaped page of resources with optional collection links."""

    value: list[ShapedResource]
    pagination: PaginationMetadata
    links: list[Link] | None = None

    def to_body(self) -> list[ShapedResource] | dict[str, Any]:
        """Response body: a bare list, or ``{value, links}`` with hypermedia."""
        if self.links is None:
            return self.value
        return {
            "value": self.value,
            LINKS_KEY: [link.model_dump() for link in self.links],
        }


class ResourceShaper(Generic[E]):
    """Shapes entities of one type into negotiated representations.

    Args:
        entity: SQLAlchemy model being exposed.
        variants: Representation models keyed by primary media subtype.
        default: Representation used when no variant matches.
        converters: Copies an entity into each representation model.
    """

    def __init__(
        self,
        entity: type[E],
        variants: Mapping[str, type[BaseModel]],
        default: type[BaseModel],
        converters: Mapping[type[BaseModel], Callable[[E], BaseModel]],
    ):
        self.entity = entity
        self.variants = variants
        self.default = default
        self.converters = converters

    def negotiate(self, accept: str | None) -> NegotiatedMediaType[type[BaseModel]]:
        """Pick the representation variant for an Accept header."""
        return negotiate(accept, self.variants, self.default)

    def validate(
        self,
        negotiated: NegotiatedMediaType[type[BaseModel]],
        order_by: str | None = None,
        fields: str | None = None,
    ) -> SortSpecification:
        """Validate client sort and field input against the negotiated variant.

        Returns:
            The sort specification for the repository query.

        Raises:
            UnknownSortFieldError: If order_by names an unmapped key.
            InvalidFieldListError: If fields names an undeclared field.
        """
        representation = negotiated.variant
        specification: SortSpecification = ()
        if order_by and order_by.strip():
            mapping = PropertyMappingRegistry.get_mapping(representation, self.entity)
            specification = build_sort_specification(order_by, mapping)
        validate_fields(representation, fields)
        logger.debug(
            "Validated %s request: sort=%s fields=%r",
            representation.__name__,
            specification,
            fields,
        )
        return specification

    def to_representation(self, negotiated: NegotiatedMediaType[type[BaseModel]], entity: E) -> BaseModel:
        """Copy an entity into the negotiated representation."""
        return self.converters[negotiated.variant](entity)

    def shape(
        self,
        negotiated: NegotiatedMediaType[type[BaseModel]],
        entity: E,
        fields: str | None = None,
        links: Iterable[Link] | None = None,
    ) -> ShapedResource:
        """Shape one entity, attaching links when hypermedia was negotiated."""
        shaped = shape_data(self.to_representation(negotiated, entity), fields)
        if negotiated.include_links and links is not None:
            attach_links(shaped, links)
        return shaped

    def shape_collection(
        self,
        negotiated: NegotiatedMediaType[type[BaseModel]],
        entities: Sequence[E],
        fields: str | None,
        pagination: PaginationMetadata,
        item_links: Callable[[E], list[Link]] | None = None,
        collection_links: Callable[[PaginationMetadata], list[Link]] | None = None,
    ) -> ShapedCollection:
        """Shape a page of entities.

        Link callables are only invoked when hypermedia was negotiated.
        """
        if not negotiated.include_links:
            return ShapedCollection(
                value=[self.shape(negotiated, entity, fields) for entity in entities],
                pagination=pagination,
            )

        value = [
            self.shape(negotiated, entity, fields, item_links(entity) if item_links else None)
            for entity in entities
        ]
        links = collection_links(pagination) if collection_links else []
        return ShapedCollection(value=value, pagination=pagination, links=links)
