"""
Route render stage — attach rendered prose to every parsed route.

Knows nothing about files or the ledger: routes and settings in,
routes with ``output`` filled in out.
"""

from __future__ import annotations

from typing import Protocol

from src.core.models.route import ParsedRoute, RouteGroup

JSON_CONTENT_TYPE = "application/json"


class RouteRenderer(Protocol):
    def route(self, route: ParsedRoute, has_request_options: bool, settings: dict, base_url: str) -> str: ...


def with_default_content_type(route: ParsedRoute) -> ParsedRoute:
    """Default ``Content-Type`` to JSON when a body is sent without one."""
    if not route.clean_body_parameters or "Content-Type" in route.headers:
        return route
    headers = {**route.headers, "Content-Type": JSON_CONTENT_TYPE}
    return route.model_copy(update={"headers": headers})


def has_request_options(route: ParsedRoute) -> bool:
    return bool(route.headers or route.clean_query_parameters or route.clean_body_parameters)


def render_route(
    route: ParsedRoute,
    renderer: RouteRenderer,
    settings: dict,
    base_url: str,
) -> ParsedRoute:
    route = with_default_content_type(route)
    output = renderer.route(route, has_request_options(route), settings, base_url)
    return route.model_copy(update={"output": output})


def render_groups(
    groups: list[RouteGroup],
    renderer: RouteRenderer,
    settings: dict,
    base_url: str,
) -> list[RouteGroup]:
    """Render every route of every group, preserving order."""
    return [
        RouteGroup(
            name=group.name,
            routes=[render_route(r, renderer, settings, base_url) for r in group.routes],
        )
        for group in groups
    ]
