"""
Generate use case — regenerate the API documentation.

Ties together config loading, route loading, and the docs writer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.core.config.loader import ConfigError, find_config_file, load_config, project_root
from src.core.config.routes_loader import DEFAULT_ROUTES_FILE, load_routes
from src.core.models.config import DocsConfig
from src.core.services.docs.group_writer import WriteState
from src.core.services.docs.writer import DocsWriter, WriteReport

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    report: WriteReport | None = None
    config: DocsConfig | None = None
    project_root: Path | None = None
    route_count: int = 0
    group_count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.ok

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["routes"] = self.route_count
        result["groups"] = self.group_count
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def resolve_inputs(
    config_path: Path | None,
    routes_path: Path | None,
) -> tuple[DocsConfig, Path, Path]:
    """Locate and load config; work out project root and routes file.

    Raises:
        ConfigError: If no config can be found or it is invalid.
    """
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        raise ConfigError("No docs.yml found.")

    config = load_config(config_path)
    root = project_root(config_path)
    return config, root, routes_path or root / DEFAULT_ROUTES_FILE


def run_generate(
    config_path: Path | None = None,
    routes_path: Path | None = None,
    force: bool = False,
) -> GenerateResult:
    """Regenerate docs from the routes file.

    Args:
        config_path: Optional explicit path to docs.yml.
        routes_path: Optional routes file (default: routes.yml next to docs.yml).
        force: Overwrite group pages even if they were edited by hand.

    Returns:
        GenerateResult with the per-file write report.
    """
    result = GenerateResult()

    try:
        config, root, routes_file = resolve_inputs(config_path, routes_path)
        groups = load_routes(routes_file)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = config
    result.project_root = root
    result.group_count = len(groups)
    result.route_count = sum(len(g.routes) for g in groups)

    writer = DocsWriter(config, root, force=force)
    try:
        result.report = writer.write_docs(groups)
    except OSError as e:
        logger.error("Documentation run failed: %s", e)
        result.error = f"Cannot write documentation: {e}"
        return result

    report = result.report
    logger.info(
        "Generate complete: %d written, %d skipped, %d failed",
        sum(1 for a in report.artifacts if a.state is WriteState.WRITTEN),
        len(report.skipped),
        len(report.failed),
    )
    return result
