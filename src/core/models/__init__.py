"""
Domain models — Pydantic types for the docs writer.

All models are re-exported here for convenient access:

    from src.core.models import DocsConfig, ParsedRoute, RouteGroup
"""

from src.core.models.config import (
    AuthConfig,
    AuthStrategy,
    DocsConfig,
    OutputPaths,
    PostmanConfig,
)
from src.core.models.route import (
    ExampleResponse,
    Parameter,
    ParsedRoute,
    RouteGroup,
    RouteMetadata,
    slugify,
)

__all__ = [
    # config.py
    "AuthConfig",
    "AuthStrategy",
    "DocsConfig",
    "OutputPaths",
    "PostmanConfig",
    # route.py
    "ExampleResponse",
    "Parameter",
    "ParsedRoute",
    "RouteGroup",
    "RouteMetadata",
    "slugify",
]
