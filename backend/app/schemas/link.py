"""Pydantic schema for hypermedia links."""

from pydantic import BaseModel, Field


class Link(BaseModel):
    """A follow-up action available on a resource."""

    href: str = Field(description="Absolute URL of the target")
    rel: str = Field(description="Relation name, e.g. 'self' or 'nextPage'")
    method: str = Field(description="HTTP verb to use, e.g. 'GET'")
