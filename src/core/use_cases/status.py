"""
Status use case — what would ``generate`` do right now?

Reports, without writing anything, the decision for every group page
and which files the modification ledger currently tracks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.core.config.loader import ConfigError
from src.core.config.routes_loader import load_routes
from src.core.models.config import DocsConfig
from src.core.services.docs.conflicts import WriteDecision, was_modified_manually
from src.core.services.docs.group_writer import SlugCollisionError
from src.core.services.docs.writer import DocsWriter
from src.core.use_cases.generate import resolve_inputs


@dataclass
class TrackedFile:
    path: str
    recorded_at: int
    exists: bool
    modified: bool


@dataclass
class StatusResult:
    """Dry-run view of the next documentation run."""

    config: DocsConfig | None = None
    project_root: Path | None = None
    plan: list[tuple[str, WriteDecision]] = field(default_factory=list)
    tracked: list[TrackedFile] = field(default_factory=list)
    force: bool = False
    error: str | None = None

    @property
    def conflicts(self) -> list[str]:
        return [path for path, decision in self.plan if decision is not WriteDecision.WRITE]

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["force"] = self.force
        result["groups"] = [
            {"path": path, "decision": decision.value} for path, decision in self.plan
        ]
        result["tracked"] = [
            {
                "path": t.path,
                "recorded_at": t.recorded_at,
                "exists": t.exists,
                "modified": t.modified,
            }
            for t in self.tracked
        ]
        return result


def get_status(
    config_path: Path | None = None,
    routes_path: Path | None = None,
    force: bool = False,
) -> StatusResult:
    """Compute the write plan and ledger view.

    Args:
        config_path: Optional explicit path to docs.yml.
        routes_path: Optional routes file (default: routes.yml next to docs.yml).
        force: Plan as if ``generate --force`` were run.
    """
    result = StatusResult(force=force)

    try:
        config, root, routes_file = resolve_inputs(config_path, routes_path)
        groups = load_routes(routes_file)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = config
    result.project_root = root

    writer = DocsWriter(config, root, force=force)
    try:
        result.plan = writer.plan(groups)
    except SlugCollisionError as e:
        result.error = str(e)
        return result

    ledger = writer.load_ledger()
    for path, recorded in ledger.entries().items():
        result.tracked.append(
            TrackedFile(
                path=path,
                recorded_at=recorded,
                exists=(root / path).is_file(),
                modified=was_modified_manually(ledger, path, root),
            )
        )

    return result
