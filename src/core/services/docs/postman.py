"""
Postman collection — one importable snapshot of every documented request.

Built from the same route groups as the Markdown pages, but independent
of them: the collection is regenerated in full on every run and never
consults the modification ledger. Nobody should hand-edit an import
artifact, so there is nothing to protect.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from src.core.models.config import AuthConfig, DocsConfig
from src.core.models.route import ParsedRoute, RouteGroup
from src.core.services.docs.group_writer import ArtifactResult, WriteState

logger = logging.getLogger(__name__)

SCHEMA_URL = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
BASE_URL_VAR = "{{baseUrl}}"

_URL_PARAM = re.compile(r"\{(\w+)\??\}")


# ═══════════════════════════════════════════════════════════════════
#  Building
# ═══════════════════════════════════════════════════════════════════


def collection_auth(auth: AuthConfig) -> dict[str, Any]:
    """Collection-level auth block for the configured strategy."""
    if not auth.enabled:
        return {"type": "noauth"}

    if auth.in_ == "bearer":
        return {"type": "bearer", "bearer": [{"key": "token", "value": "", "type": "string"}]}
    if auth.in_ == "basic":
        return {"type": "basic", "basic": []}
    if auth.in_ in ("header", "query"):
        return {
            "type": "apikey",
            "apikey": [
                {"key": "in", "value": auth.in_, "type": "string"},
                {"key": "key", "value": auth.name, "type": "string"},
                {"key": "value", "value": "", "type": "string"},
            ],
        }
    return {"type": "noauth"}


def _as_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def _request_url(route: ParsedRoute, protocol: str) -> dict[str, Any]:
    path = _URL_PARAM.sub(r":\1", route.uri.lstrip("/"))
    query = [
        {
            "key": key,
            "value": _as_text(value),
            "description": (
                route.query_parameters[key].description if key in route.query_parameters else ""
            ),
            "disabled": False,
        }
        for key, value in route.clean_query_parameters.items()
    ]
    variables = [
        {
            "id": name,
            "key": name,
            "value": _as_text(route.clean_url_parameters.get(name, "")),
            "description": param.description,
        }
        for name, param in route.url_parameters.items()
    ]

    raw = f"{BASE_URL_VAR}/{path}"
    if query:
        raw += "?" + "&".join(f"{q['key']}={q['value']}" for q in query)

    url: dict[str, Any] = {
        "protocol": protocol,
        "host": BASE_URL_VAR,
        "path": path,
        "query": query,
        "raw": raw,
    }
    if variables:
        url["variable"] = variables
    return url


def _request_item(route: ParsedRoute, auth: AuthConfig, protocol: str) -> dict[str, Any]:
    headers = [{"key": k, "value": _as_text(v)} for k, v in route.headers.items()]
    if "Accept" not in route.headers:
        headers.append({"key": "Accept", "value": "application/json"})

    request: dict[str, Any] = {
        "url": _request_url(route, protocol),
        "method": route.method,
        "header": headers,
        "body": {
            "mode": "raw",
            "raw": json.dumps(route.clean_body_parameters, ensure_ascii=False, default=str)
            if route.clean_body_parameters
            else "",
        },
        "description": route.metadata.description,
    }
    if auth.enabled and not route.metadata.authenticated:
        request["auth"] = {"type": "noauth"}

    return {"name": route.display_title, "request": request, "response": []}


def build_collection(
    groups: list[RouteGroup],
    config: DocsConfig,
    collection_id: str | None = None,
) -> dict[str, Any]:
    """Assemble the Postman collection for every group and route."""
    protocol = urlsplit(config.base_url).scheme or "http"
    return {
        "variable": [
            {
                "id": "baseUrl",
                "key": "baseUrl",
                "type": "string",
                "name": "string",
                "value": config.base_url.rstrip("/"),
            }
        ],
        "info": {
            "name": config.title,
            "_postman_id": collection_id or str(uuid.uuid4()),
            "description": config.postman.description,
            "schema": SCHEMA_URL,
        },
        "item": [
            {
                "name": group.name,
                "description": group.description,
                "item": [_request_item(route, config.auth, protocol) for route in group.routes],
            }
            for group in groups
        ],
        "auth": collection_auth(config.auth),
    }


# ═══════════════════════════════════════════════════════════════════
#  Writing
# ═══════════════════════════════════════════════════════════════════


def write_collection(
    groups: list[RouteGroup],
    config: DocsConfig,
    project_root: Path,
) -> ArtifactResult:
    """Build and write the collection. Failures are reported, not raised."""
    rel_path = config.collection_path
    logger.info("Generating Postman collection")

    try:
        content = json.dumps(build_collection(groups, config), indent=4, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("Cannot build Postman collection: %s", e)
        return ArtifactResult(path=rel_path, state=WriteState.FAILED, error=str(e))

    target = project_root / rel_path
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write Postman collection to %s: %s", rel_path, e)
        return ArtifactResult(path=rel_path, state=WriteState.FAILED, error=str(e))

    logger.info("Wrote Postman collection to: %s", rel_path)
    return ArtifactResult(path=rel_path, state=WriteState.WRITTEN)
