"""
Group writer — write (or protect) one Markdown page per route group.

Per group the state machine is::

    PENDING ──► WRITTEN
       │
       └──► CONFLICT ──► FORCED ──► WRITTEN     (--force)
                    └──► SKIPPED                (default)

A written page costs exactly one render, one write and one ledger
update. A skipped page costs nothing and keeps its old ledger entry.
A filesystem error marks the page FAILED and the run moves on.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from src.core.models.route import ParsedRoute, RouteGroup
from src.core.persistence.mtime_ledger import ModificationLedger
from src.core.services.docs.conflicts import WriteDecision, decide_write, on_disk_mtime

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class WriteState(str, enum.Enum):
    PENDING = "pending"
    CONFLICT = "conflict"
    FORCED = "forced"
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ArtifactResult:
    """Outcome for one generated file."""

    path: str
    state: WriteState
    forced: bool = False        # a manual edit was discarded
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.state is not WriteState.FAILED

    def to_dict(self) -> dict:
        result: dict = {"path": self.path, "state": self.state.value}
        if self.forced:
            result["forced"] = True
        if self.error:
            result["error"] = self.error
        return result


class GroupRenderer(Protocol):
    def group(self, name: str, description: str, routes: list[ParsedRoute]) -> str: ...


class SlugCollisionError(ValueError):
    """Two different group names map to the same output file."""


def check_slug_collisions(groups: list[RouteGroup]) -> None:
    """Raise SlugCollisionError if two group names share a slug."""
    seen: dict[str, str] = {}
    for group in groups:
        slug = group.slug
        if slug in seen and seen[slug] != group.name:
            raise SlugCollisionError(
                f"Groups {seen[slug]!r} and {group.name!r} both map to "
                f"groups/{slug}.md — rename one of them"
            )
        seen[slug] = group.name


def write_tracked_file(
    root: Path,
    rel_path: str,
    content: str,
    ledger: ModificationLedger,
    clock: Clock = time.time,
) -> None:
    """Write ``content`` to ``root / rel_path`` and record the write time."""
    target = root / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    ledger.record(rel_path, int(clock()))
    logger.debug("Wrote %s", target)


class GroupWriter:
    """Writes group pages, consulting the ledger before each one."""

    def __init__(
        self,
        ledger: ModificationLedger,
        project_root: Path,
        groups_dir: str,
        renderer: GroupRenderer,
        *,
        force: bool = False,
        clock: Clock = time.time,
    ):
        self.ledger = ledger
        self.project_root = project_root
        self.groups_dir = groups_dir.rstrip("/")
        self.renderer = renderer
        self.force = force
        self.clock = clock

    def group_path(self, group: RouteGroup) -> str:
        return f"{self.groups_dir}/{group.slug}.md"

    def plan(self, group: RouteGroup) -> WriteDecision:
        """Decide what ``write_group`` would do, without touching anything."""
        path = self.group_path(group)
        return decide_write(
            self.ledger.get(path),
            on_disk_mtime(self.project_root / path),
            self.force,
        )

    def write_group(self, group: RouteGroup) -> ArtifactResult:
        path = self.group_path(group)
        state = WriteState.PENDING
        decision = self.plan(group)

        if decision is not WriteDecision.WRITE:
            state = WriteState.CONFLICT

        if decision is WriteDecision.SKIP_WARN:
            logger.warning("Skipping modified file %s", path)
            return ArtifactResult(path=path, state=WriteState.SKIPPED)

        forced = state is WriteState.CONFLICT
        if forced:
            state = WriteState.FORCED
            logger.warning("Discarded manual changes for file %s", path)

        content = self.renderer.group(group.name, group.description, list(group.routes))
        try:
            write_tracked_file(self.project_root, path, content, self.ledger, self.clock)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            return ArtifactResult(path=path, state=WriteState.FAILED, forced=forced, error=str(e))

        return ArtifactResult(path=path, state=WriteState.WRITTEN, forced=forced)

    def write_all(self, groups: list[RouteGroup]) -> list[ArtifactResult]:
        """Process every group in order."""
        return [self.write_group(group) for group in groups]
