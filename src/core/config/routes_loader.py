"""
Routes loader — reads an extracted routes file into ordered route groups.

Two layouts are accepted (YAML or JSON)::

    # mapping: group name -> routes
    Users:
      - uri: api/users
        methods: [GET]

    # flat list, grouped by metadata.group_name in first-seen order
    - uri: api/users
      metadata: {group_name: Users}

Keys may be snake_case or the camelCase emitted by most extractors.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.core.config.loader import ConfigError, read_yaml
from src.core.models.route import ParsedRoute, RouteGroup

logger = logging.getLogger(__name__)

DEFAULT_ROUTES_FILE = "routes.yml"
DEFAULT_GROUP = "Endpoints"


def _parse_route(raw: Any, where: str) -> ParsedRoute:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(raw).__name__}")
    try:
        return ParsedRoute.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{where}: invalid route: {e}") from e


def _in_group(route: ParsedRoute, group_name: str) -> ParsedRoute:
    if route.metadata.group_name == group_name:
        return route
    metadata = route.metadata.model_copy(update={"group_name": group_name})
    return route.model_copy(update={"metadata": metadata})


def groups_from_data(data: Any, source: str = "<routes>") -> list[RouteGroup]:
    """Build route groups from already-parsed YAML/JSON data."""
    if data is None:
        return []

    if isinstance(data, dict) and isinstance(data.get("routes"), list):
        data = data["routes"]

    buckets: dict[str, list[ParsedRoute]] = {}

    if isinstance(data, dict):
        for group_name, routes in data.items():
            if not isinstance(routes, list):
                raise ConfigError(f"{source}: group {group_name!r} must be a list of routes")
            name = str(group_name)
            bucket = buckets.setdefault(name, [])
            for i, raw in enumerate(routes):
                route = _parse_route(raw, f"{source}: {name}[{i}]")
                bucket.append(_in_group(route, name))
    elif isinstance(data, list):
        for i, raw in enumerate(data):
            route = _parse_route(raw, f"{source}: [{i}]")
            name = route.group_name or DEFAULT_GROUP
            buckets.setdefault(name, []).append(_in_group(route, name))
    else:
        raise ConfigError(
            f"{source}: expected a mapping of groups or a list of routes, "
            f"got {type(data).__name__}"
        )

    return [RouteGroup(name=name, routes=routes) for name, routes in buckets.items()]


def load_routes(path: Path) -> list[RouteGroup]:
    """Load route groups from a routes file.

    Raises:
        ConfigError: If the file is missing, unparseable, or malformed.
    """
    groups = groups_from_data(read_yaml(path), source=str(path))
    logger.info(
        "Loaded %d routes in %d groups from %s",
        sum(len(g.routes) for g in groups),
        len(groups),
        path,
    )
    return groups
