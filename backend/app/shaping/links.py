"""Hypermedia link building.

Resource links describe what a client can do with a single item; collection
links let a client page through results using nothing but the links
themselves, so every page link repeats the full query.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fastapi import Request

from app.schemas.link import Link
from app.shaping.pagination import PaginationMetadata
from app.shaping.shaper import ShapedResource

LINKS_KEY = "links"


def url_for(request: Request, route_name: str, query: Mapping[str, Any] | None = None, **path_params: Any) -> str:
    """Build an absolute URL for a named route.

    Query parameters whose value is None are omitted.
    """
    url = request.url_for(route_name, **{k: str(v) for k, v in path_params.items()})
    params = {k: v for k, v in (query or {}).items() if v is not None}
    if params:
        url = url.include_query_params(**params)
    return str(url)


def build_resource_links(self_href: str, actions: Iterable[tuple[str, str, str]] = ()) -> list[Link]:
    """Build the links for a single resource.

    Args:
        self_href: URL that re-fetches the resource in the same shape.
        actions: ``(href, rel, method)`` triples, emitted in order after self.

    Returns:
        The self link followed by the action links.
    """
    links = [Link(href=self_href, rel="self", method="GET")]
    links.extend(Link(href=href, rel=rel, method=method) for href, rel, method in actions)
    return links


def build_collection_links(
    page_href: Callable[[int], str],
    pagination: PaginationMetadata,
) -> list[Link]:
    """Build self, nextPage and previousPage links for a collection page.

    Args:
        page_href: Builds the collection URL for a page number, carrying the
            rest of the query unchanged.
        pagination: Metadata of the current page.
    """
    current = pagination.current_page
    links = [Link(href=page_href(current), rel="self", method="GET")]
    if pagination.has_next:
        links.append(Link(href=page_href(current + 1), rel="nextPage", method="GET"))
    if pagination.has_previous:
        links.append(Link(href=page_href(current - 1), rel="previousPage", method="GET"))
    return links


def attach_links(resource: ShapedResource, links: Iterable[Link]) -> ShapedResource:
    """Add a ``links`` entry to a shaped resource and return it."""
    resource[LINKS_KEY] = [link.model_dump() for link in links]
    return resource
