"""Content negotiation over vendor media types.

A client picks a representation variant and opts into hypermedia through
the Accept header, e.g. ``application/vnd.courselibrary.author.full.hateoas+json``
asks for the full author representation with links. Bodies are always JSON,
so only ``application/json``, ``+json`` types and wildcards are acceptable.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.shaping.errors import MalformedMediaTypeError, NotAcceptableError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/json"
JSON_SUFFIX = "json"
WILDCARD = "*"
HYPERMEDIA_MARKER = "hateoas"
VENDOR_PREFIX = "vnd."

# RFC 6838 restricted-name characters, plus '*' for wildcards
_TOKEN = r"[A-Za-z0-9!#$&^_.+*-]+"
_MEDIA_TYPE_RE = re.compile(rf"^(?P<type>{_TOKEN})/(?P<subtype>{_TOKEN})$")
_PARAMETER_RE = re.compile(rf'^(?P<name>{_TOKEN})=(?P<value>{_TOKEN}|"[^"]*")$')

V = TypeVar("V")


@dataclass(frozen=True)
class MediaType:
    """Parsed media type.

    ``subtype`` excludes the structured syntax suffix, so
    ``application/vnd.a.hateoas+json`` has subtype ``vnd.a.hateoas`` and
    suffix ``json``.
    """

    type: str
    subtype: str
    suffix: str | None = None
    parameters: Mapping[str, str] = field(default_factory=dict)

    @property
    def essence(self) -> str:
        """Type and full subtype without parameters."""
        full_subtype = f"{self.subtype}+{self.suffix}" if self.suffix else self.subtype
        return f"{self.type}/{full_subtype}"

    @property
    def is_vendor(self) -> bool:
        return self.subtype.lower().startswith(VENDOR_PREFIX)

    @property
    def is_json(self) -> bool:
        """Whether a JSON body satisfies this media type."""
        if self.type == WILDCARD:
            return self.subtype == WILDCARD
        if self.type != "application":
            return False
        return self.subtype.lower() in (WILDCARD, JSON_SUFFIX) or self.suffix == JSON_SUFFIX


@dataclass(frozen=True)
class NegotiatedMediaType(Generic[V]):
    """Outcome of negotiating an Accept header against known variants."""

    media_type: MediaType
    include_links: bool
    primary_subtype: str
    variant: V

    @property
    def content_type(self) -> str:
        """Content-Type to answer with: the vendor type if requested, else JSON."""
        if self.media_type.is_vendor:
            return self.media_type.essence
        return DEFAULT_MEDIA_TYPE


def parse_media_type(token: str) -> MediaType:
    """Parse a single media type such as ``application/vnd.x+json; q=0.9``.

    Raises:
        MalformedMediaTypeError: If the token is not ``type/subtype`` with
            valid characters and well-formed parameters.
    """
    essence, *raw_parameters = token.split(";")
    match = _MEDIA_TYPE_RE.match(essence.strip())
    if match is None:
        raise MalformedMediaTypeError(token)

    parameters: dict[str, str] = {}
    for raw in raw_parameters:
        raw = raw.strip()
        if not raw:
            continue
        param_match = _PARAMETER_RE.match(raw)
        if param_match is None:
            raise MalformedMediaTypeError(token)
        parameters[param_match["name"].lower()] = param_match["value"].strip('"')

    subtype = match["subtype"]
    suffix = None
    if "+" in subtype:
        subtype, suffix = subtype.rsplit("+", 1)
        if not subtype or not suffix:
            raise MalformedMediaTypeError(token)

    return MediaType(
        type=match["type"].lower(),
        subtype=subtype,
        suffix=suffix.lower() if suffix else None,
        parameters=parameters,
    )


def parse_accept(accept: str | None) -> MediaType:
    """Parse an Accept header, negotiating on its first entry.

    A missing or blank header is treated as ``application/json``.
    """
    if accept is None or not accept.strip():
        return parse_media_type(DEFAULT_MEDIA_TYPE)
    first = accept.split(",", 1)[0]
    return parse_media_type(first.strip())


def negotiate(accept: str | None, variants: Mapping[str, V], default: V) -> NegotiatedMediaType[V]:
    """Select a representation variant and hypermedia mode from an Accept header.

    Links are requested when the subtype ends with ``hateoas`` (any case).
    The marker and its leading separator are stripped to get the primary
    subtype, which picks the variant by exact match; unknown primary
    subtypes fall back to the default variant.

    Args:
        accept: Raw Accept header value.
        variants: Representation variants keyed by primary subtype.
        default: Variant used when no key matches.

    Raises:
        MalformedMediaTypeError: If the header cannot be parsed.
        NotAcceptableError: If the media type cannot be answered with JSON.
    """
    media_type = parse_accept(accept)
    if not media_type.is_json:
        raise NotAcceptableError(media_type.essence)

    include_links = media_type.subtype.lower().endswith(HYPERMEDIA_MARKER)

    primary_subtype = media_type.subtype
    if include_links:
        primary_subtype = primary_subtype[: -(len(HYPERMEDIA_MARKER) + 1)]

    variant = variants.get(primary_subtype)
    if variant is None:
        logger.debug("No variant for %r, using default", primary_subtype)
        variant = default

    return NegotiatedMediaType(
        media_type=media_type,
        include_links=include_links,
        primary_subtype=primary_subtype,
        variant=variant,
    )
