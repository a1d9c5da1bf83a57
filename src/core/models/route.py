"""
Route models — one documented endpoint and the group it belongs to.

Routes arrive already extracted from an application's routing layer.
They are frozen: every stage that needs a modified route makes a copy.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_ROUTE_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
)


class RouteMetadata(BaseModel):
    """Descriptive metadata attached to a route by the extractor."""

    model_config = _ROUTE_CONFIG

    group_name: str = ""
    group_description: str = ""
    title: str = ""
    description: str = ""
    authenticated: bool = False


class Parameter(BaseModel):
    """A documented URL, query or body parameter."""

    model_config = _ROUTE_CONFIG

    type: str = "string"
    required: bool = False
    description: str = ""
    value: Any = None


class ExampleResponse(BaseModel):
    """An example response for a route."""

    model_config = _ROUTE_CONFIG

    status: int = 200
    content: str = ""
    description: str = ""


class ParsedRoute(BaseModel):
    """One documented endpoint.

    ``clean_*`` parameter sets hold plain example values, ready to be
    dropped into a request; the un-prefixed sets keep the full parameter
    documentation. ``output`` is empty until the render stage fills it.
    """

    model_config = _ROUTE_CONFIG

    methods: list[str] = Field(default_factory=lambda: ["GET"])
    uri: str = "/"
    metadata: RouteMetadata = Field(default_factory=RouteMetadata)

    headers: dict[str, str] = Field(default_factory=dict)
    url_parameters: dict[str, Parameter] = Field(default_factory=dict)
    query_parameters: dict[str, Parameter] = Field(default_factory=dict)
    body_parameters: dict[str, Parameter] = Field(default_factory=dict)
    clean_url_parameters: dict[str, Any] = Field(default_factory=dict)
    clean_query_parameters: dict[str, Any] = Field(default_factory=dict)
    clean_body_parameters: dict[str, Any] = Field(default_factory=dict)
    responses: list[ExampleResponse] = Field(default_factory=list)

    output: str = ""

    @property
    def group_name(self) -> str:
        return self.metadata.group_name

    @property
    def method(self) -> str:
        """Primary HTTP method (HEAD is only listed when nothing else is)."""
        for m in self.methods:
            if m.upper() != "HEAD":
                return m.upper()
        return self.methods[0].upper() if self.methods else "GET"

    @property
    def display_title(self) -> str:
        return self.metadata.title or self.uri


class RouteGroup(BaseModel):
    """An ordered bucket of routes sharing a group name."""

    model_config = ConfigDict(frozen=True)

    name: str
    routes: list[ParsedRoute] = Field(default_factory=list)

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def description(self) -> str:
        """First non-empty group description among the routes, or ``""``."""
        for route in self.routes:
            if route.metadata.group_description != "":
                return route.metadata.group_description
        return ""


# ── Slugs ───────────────────────────────────────────────────────────

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(value: str, separator: str = "-") -> str:
    """Turn a group name into a filesystem-safe identifier.

    Accents are transliterated to ASCII, ``@`` becomes ``at``, everything
    else that isn't a letter, digit, space, dash or underscore is dropped.

        >>> slugify("User Management")
        'user-management'
        >>> slugify("Café  & Bar_stuff")
        'cafe-bar-stuff'
    """
    ascii_value = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    lowered = ascii_value.replace("@", f"{separator}at{separator}").lower()
    cleaned = _NON_SLUG_CHARS.sub("", lowered)
    return _SEPARATORS.sub(separator, cleaned).strip(separator)
