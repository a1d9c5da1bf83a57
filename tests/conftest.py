"""
Shared test fixtures and configuration.
"""

import os
import textwrap
from pathlib import Path

import pytest

from src.core.models.config import DocsConfig
from src.core.models.route import ParsedRoute, RouteGroup

# Far enough ahead that files written during a test are never newer
# than what the fake clock recorded for them.
FUTURE = 4_000_000_000


class FakeClock:
    """Deterministic clock: returns ``now`` and advances by ``step`` per call."""

    def __init__(self, start: int = FUTURE, step: int = 0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return float(value)


class FirstChoice:
    """Random source that always picks the first option."""

    def choice(self, seq):
        return seq[0]


def _make_route(
    uri: str = "api/users",
    group: str = "Users",
    group_description: str = "",
    **extra,
) -> ParsedRoute:
    data = {
        "uri": uri,
        "methods": extra.pop("methods", ["GET"]),
        "metadata": {
            "group_name": group,
            "group_description": group_description,
            "title": extra.pop("title", f"Endpoint {uri}"),
            "authenticated": extra.pop("authenticated", False),
        },
    }
    data.update(extra)
    return ParsedRoute.model_validate(data)


def touch_later(path: Path, seconds: int = 60) -> None:
    """Simulate a manual edit: bump the mtime past the fake clock."""
    stamp = FUTURE + seconds
    os.utime(path, (stamp, stamp))


@pytest.fixture
def make_route():
    """Factory for ParsedRoute objects."""
    return _make_route


@pytest.fixture
def edit_file():
    """Mark a file as edited by hand after the last generation."""
    return touch_later


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def first_choice() -> FirstChoice:
    return FirstChoice()


@pytest.fixture
def docs_config() -> DocsConfig:
    return DocsConfig.model_validate({
        "title": "Acme API Documentation",
        "base_url": "https://api.acme.test",
        "example_languages": ["bash", "javascript"],
        "auth": {"enabled": True, "in": "bearer", "name": "token"},
        "postman": {"enabled": True},
    })


@pytest.fixture
def groups() -> list[RouteGroup]:
    """Two groups with a couple of routes each."""
    return [
        RouteGroup(
            name="Users",
            routes=[
                _make_route("api/users", "Users", group_description="Manage users."),
                _make_route(
                    "api/users",
                    "Users",
                    methods=["POST"],
                    title="Create a user",
                    authenticated=True,
                    clean_body_parameters={"name": "Jane"},
                ),
            ],
        ),
        RouteGroup(
            name="Billing Plans",
            routes=[_make_route("api/plans", "Billing Plans")],
        ),
    ]


@pytest.fixture
def config_file(project_root: Path) -> Path:
    """A docs.yml plus routes.yml in the project root."""
    (project_root / "docs.yml").write_text(textwrap.dedent("""\
        title: Acme API Documentation
        base_url: https://api.acme.test
        type: static
        example_languages: [bash, python]
        auth:
          enabled: true
          in: header
          name: X-Api-Key
        postman:
          enabled: true
    """))
    (project_root / "routes.yml").write_text(textwrap.dedent("""\
        Users:
          - uri: api/users
            methods: [GET]
            metadata:
              title: List users
              groupDescription: Everything about users.
          - uri: api/users/{id}
            methods: [DELETE]
            urlParameters:
              id: {type: integer, required: true, description: The user ID.}
            cleanUrlParameters: {id: 4}
        Orders:
          - uri: api/orders
            methods: [POST]
            cleanBodyParameters: {sku: ABC-1, quantity: 2}
    """))
    return project_root / "docs.yml"
