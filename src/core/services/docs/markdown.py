"""
Markdown rendering — index, authentication, group and route pages.

Every function here is pure: same inputs, byte-identical output.
``MarkdownRenderer`` bundles them so the writer can be handed a
different renderer (tests, custom themes) without knowing the details.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable
from urllib.parse import urlencode

import yaml

from src.core.models.route import ParsedRoute

logger = logging.getLogger(__name__)

_URL_PARAM = re.compile(r"\{(\w+)\??\}")

_METHOD_BADGES = {
    "GET": "green",
    "HEAD": "darkgreen",
    "POST": "black",
    "PUT": "darkblue",
    "PATCH": "purple",
    "DELETE": "red",
}


# ═══════════════════════════════════════════════════════════════════
#  URL helpers
# ═══════════════════════════════════════════════════════════════════


def request_url(route: ParsedRoute, base_url: str) -> str:
    """Absolute URL for a route, with URL parameters filled in."""

    def _fill(match: re.Match) -> str:
        name = match.group(1)
        if name in route.clean_url_parameters:
            return str(route.clean_url_parameters[name])
        return match.group(0)

    path = _URL_PARAM.sub(_fill, route.uri.lstrip("/"))
    return f"{base_url.rstrip('/')}/{path}"


def query_string(route: ParsedRoute) -> str:
    if not route.clean_query_parameters:
        return ""
    return "?" + urlencode(route.clean_query_parameters, doseq=True)


def _json(value: Any, indent: int | None = 4) -> str:
    # YAML hands over dates and timestamps; print them as text
    return json.dumps(value, indent=indent, ensure_ascii=False, default=str)


def _shell_quote(text: str) -> str:
    """Wrap text in single quotes for a POSIX shell."""
    return "'" + text.replace("'", "'\\''") + "'"


# ═══════════════════════════════════════════════════════════════════
#  Code samples
# ═══════════════════════════════════════════════════════════════════


def _bash_sample(route: ParsedRoute, has_request_options: bool, base_url: str) -> list[str]:
    url = request_url(route, base_url) + query_string(route)
    lines = ["```bash", f"curl -X {route.method} \\"]
    if not has_request_options:
        lines.append(f'    "{url}"')
        lines.append("```")
        return lines

    options = [f'    "{url}"']
    for key, value in route.headers.items():
        options.append(f'    -H "{key}: {value}"')
    if route.clean_body_parameters:
        body = _json(route.clean_body_parameters, indent=None)
        options.append(f"    -d {_shell_quote(body)}")
    lines.append(" \\\n".join(options))
    lines.append("```")
    return lines


def _javascript_sample(route: ParsedRoute, has_request_options: bool, base_url: str) -> list[str]:
    lines = [
        "```javascript",
        "const url = new URL(",
        f'    "{request_url(route, base_url)}"',
        ");",
        "",
    ]
    if route.clean_query_parameters:
        lines.append(f"let params = {_json(route.clean_query_parameters)};")
        lines.append("Object.keys(params)")
        lines.append("    .forEach(key => url.searchParams.append(key, params[key]));")
        lines.append("")

    fetch_options = [f'    method: "{route.method}",']
    if has_request_options and route.headers:
        lines.append(f"let headers = {_json(route.headers)};")
        lines.append("")
        fetch_options.append("    headers,")
    if route.clean_body_parameters:
        lines.append(f"let body = {_json(route.clean_body_parameters)};")
        lines.append("")
        fetch_options.append("    body: JSON.stringify(body),")

    lines.append("fetch(url, {")
    lines.extend(fetch_options)
    lines.append("}).then(response => response.json());")
    lines.append("```")
    return lines


def _python_sample(route: ParsedRoute, has_request_options: bool, base_url: str) -> list[str]:
    lines = ["```python", "import requests", "import json", ""]
    lines.append(f"url = '{request_url(route, base_url)}'")

    kwargs = []
    if route.clean_body_parameters:
        lines.append(f"payload = {_json(route.clean_body_parameters)}")
        kwargs.append("json=payload")
    if route.clean_query_parameters:
        lines.append(f"params = {_json(route.clean_query_parameters)}")
        kwargs.append("params=params")
    if has_request_options and route.headers:
        lines.append(f"headers = {_json(route.headers)}")
        kwargs.insert(0, "headers=headers")

    args = ", ".join([f"'{route.method}'", "url", *kwargs])
    lines.append("")
    lines.append(f"response = requests.request({args})")
    lines.append("response.json()")
    lines.append("```")
    return lines


CODE_SAMPLES: dict[str, Callable[[ParsedRoute, bool, str], list[str]]] = {
    "bash": _bash_sample,
    "javascript": _javascript_sample,
    "python": _python_sample,
}


# ═══════════════════════════════════════════════════════════════════
#  Pages
# ═══════════════════════════════════════════════════════════════════


def _parameter_section(title: str, params: dict) -> list[str]:
    if not params:
        return []
    lines = [f"#### {title}", ""]
    for name, param in params.items():
        required = "required" if param.required else "optional"
        lines.append(f"`{name}` {param.type}  {required}  ")
        if param.description:
            lines.append(param.description)
        lines.append("")
    return lines


def render_route(
    route: ParsedRoute,
    has_request_options: bool,
    settings: dict,
    base_url: str,
) -> str:
    """Render the documentation block for a single endpoint."""
    meta = route.metadata
    lines = [f"## {route.display_title}", ""]

    if meta.authenticated:
        lines += ['<small class="badge badge-darkred">requires authentication</small>', ""]
    if meta.description:
        lines += [meta.description, ""]

    lines += ["> Example request:", ""]
    for language in settings.get("languages", []):
        sample = CODE_SAMPLES.get(language)
        if sample is None:
            logger.debug("No code sample template for language %r", language)
            continue
        lines += sample(route, has_request_options, base_url)
        lines.append("")

    for response in route.responses:
        lines += [f"> Example response ({response.status}):", ""]
        lines += ["```json", response.content, "```", ""]

    lines += ["### Request", ""]
    for method in route.methods:
        colour = _METHOD_BADGES.get(method.upper(), "grey")
        lines.append(f'<small class="badge badge-{colour}">{method.upper()}</small>')
    lines += [f"`{route.uri}`", ""]

    lines += _parameter_section("URL Parameters", route.url_parameters)
    lines += _parameter_section("Query Parameters", route.query_parameters)
    lines += _parameter_section("Body Parameters", route.body_parameters)

    return "\n".join(lines).rstrip("\n") + "\n"


def render_group(name: str, description: str, routes: list[ParsedRoute]) -> str:
    """Render a group page: heading, description, then each route's output."""
    lines = [f"# {name}", ""]
    if description:
        lines += [description, ""]
    for route in routes:
        lines.append(route.output.rstrip("\n"))
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"


def render_index(
    settings: dict,
    intro_text: str,
    show_postman_button: bool,
    postman_link: str = "./collection.json",
) -> str:
    """Render index.md: YAML frontmatter followed by the introduction."""
    toc_footers = []
    if show_postman_button:
        toc_footers.append(f'<a href="{postman_link}">View Postman collection</a>')

    frontmatter = {
        "title": settings.get("title", ""),
        "language_tabs": list(settings.get("languages", [])),
        "includes": ["./authentication.md", "./groups/*"],
        "logo": settings.get("logo") or False,
        "toc_footers": toc_footers,
    }

    lines = [
        "---",
        yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True).rstrip("\n"),
        "---",
        "",
        "# Introduction",
        "",
    ]
    if intro_text:
        lines += [intro_text.strip(), ""]
    return "\n".join(lines).rstrip("\n") + "\n"


def render_auth(is_authed: bool, text: str) -> str:
    """Render authentication.md."""
    lines = ["# Authenticating requests", ""]
    if is_authed:
        lines.append(text)
    else:
        lines.append("This API is not authenticated.")
    return "\n".join(lines) + "\n"


class MarkdownRenderer:
    """Default renderer used by the docs writer."""

    def route(self, route: ParsedRoute, has_request_options: bool, settings: dict, base_url: str) -> str:
        return render_route(route, has_request_options, settings, base_url)

    def group(self, name: str, description: str, routes: list[ParsedRoute]) -> str:
        return render_group(name, description, routes)

    def index(self, settings: dict, intro_text: str, show_postman_button: bool) -> str:
        return render_index(settings, intro_text, show_postman_button)

    def auth(self, is_authed: bool, text: str) -> str:
        return render_auth(is_authed, text)
