"""
Docs writer — one full regeneration run.

Order of side effects (fixed):
    index.md → authentication.md → groups/<slug>.md (each) → ledger → collection

The ledger is loaded once at the start and persisted exactly once after
the groups, so whatever happens to individual files, every successful
write this run is recorded and every skipped file keeps its old entry.
Writes are not transactional: a failure on one artifact is reported and
the rest of the run carries on.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path

from src.core.models.config import DocsConfig
from src.core.models.route import RouteGroup
from src.core.persistence.mtime_ledger import ModificationLedger
from src.core.services.docs.auth_text import RandomSource, auth_sentence
from src.core.services.docs.conflicts import WriteDecision
from src.core.services.docs.group_writer import (
    ArtifactResult,
    Clock,
    GroupWriter,
    WriteState,
    check_slug_collisions,
    write_tracked_file,
)
from src.core.services.docs.markdown import MarkdownRenderer
from src.core.services.docs.postman import write_collection
from src.core.services.docs.render import render_groups

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Everything one run wrote, skipped or failed to write."""

    source_dir: str = ""
    index: ArtifactResult | None = None
    auth: ArtifactResult | None = None
    groups: list[ArtifactResult] = field(default_factory=list)
    collection: ArtifactResult | None = None
    ledger_saved: bool = False
    error: str | None = None

    @property
    def artifacts(self) -> list[ArtifactResult]:
        items = [self.index, self.auth, *self.groups, self.collection]
        return [a for a in items if a is not None]

    @property
    def failed(self) -> list[ArtifactResult]:
        return [a for a in self.artifacts if a.state is WriteState.FAILED]

    @property
    def skipped(self) -> list[ArtifactResult]:
        return [a for a in self.groups if a.state is WriteState.SKIPPED]

    @property
    def ok(self) -> bool:
        return self.error is None and self.ledger_saved and not self.failed

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "source_dir": self.source_dir,
            "index": self.index.to_dict() if self.index else None,
            "authentication": self.auth.to_dict() if self.auth else None,
            "groups": [g.to_dict() for g in self.groups],
            "collection": self.collection.to_dict() if self.collection else None,
            "ledger_saved": self.ledger_saved,
        }
        if self.error:
            result["error"] = self.error
        return result


class DocsWriter:
    """Regenerates the Markdown sources and the Postman collection."""

    def __init__(
        self,
        config: DocsConfig,
        project_root: Path,
        *,
        force: bool = False,
        renderer: MarkdownRenderer | None = None,
        clock: Clock = time.time,
        rng: RandomSource | None = None,
    ):
        self.config = config
        self.project_root = project_root
        self.force = force
        self.renderer = renderer or MarkdownRenderer()
        self.clock = clock
        self.rng = rng or random.Random()

    @property
    def source_dir(self) -> str:
        return self.config.output.source_dir.rstrip("/")

    @property
    def groups_dir(self) -> str:
        return f"{self.source_dir}/groups"

    def load_ledger(self) -> ModificationLedger:
        return ModificationLedger.load(self.project_root / self.config.ledger_path)

    def group_writer(self, ledger: ModificationLedger) -> GroupWriter:
        return GroupWriter(
            ledger,
            self.project_root,
            self.groups_dir,
            self.renderer,
            force=self.force,
            clock=self.clock,
        )

    # ── Run ─────────────────────────────────────────────────────────

    def write_docs(self, groups: list[RouteGroup]) -> WriteReport:
        """Write every artifact for ``groups`` and return what happened."""
        report = self.write_markdown_sources(groups)
        if self.config.postman.enabled:
            report.collection = write_collection(groups, self.config, self.project_root)
        return report

    def write_markdown_sources(self, groups: list[RouteGroup]) -> WriteReport:
        report = WriteReport(source_dir=self.source_dir)
        logger.info("Writing source Markdown files to: %s", self.source_dir)

        (self.project_root / self.groups_dir).mkdir(parents=True, exist_ok=True)
        ledger = self.load_ledger()
        settings = self.config.render_settings()

        report.index = self._write_simple(
            f"{self.source_dir}/index.md",
            lambda: self.renderer.index(settings, self.config.intro_text, self.config.postman.enabled),
            ledger,
        )
        report.auth = self._write_simple(
            f"{self.source_dir}/authentication.md",
            lambda: self.renderer.auth(
                self.config.auth.enabled, auth_sentence(self.config.auth, self.rng)
            ),
            ledger,
        )

        try:
            check_slug_collisions(groups)
        except ValueError as e:
            logger.error("%s", e)
            report.error = str(e)
        else:
            rendered = render_groups(groups, self.renderer, settings, self.config.base_url)
            report.groups = self.group_writer(ledger).write_all(rendered)

        try:
            ledger.persist()
            report.ledger_saved = True
        except OSError as e:
            logger.error("Failed to save modification ledger: %s", e)
            report.error = report.error or f"Cannot save modification ledger: {e}"

        logger.info("Wrote source Markdown files to: %s", self.source_dir)
        return report

    def plan(self, groups: list[RouteGroup]) -> list[tuple[str, WriteDecision]]:
        """What a run would do to each group page (no writes)."""
        check_slug_collisions(groups)
        writer = self.group_writer(self.load_ledger())
        return [(writer.group_path(g), writer.plan(g)) for g in groups]

    def _write_simple(self, rel_path: str, render, ledger: ModificationLedger) -> ArtifactResult:
        try:
            write_tracked_file(self.project_root, rel_path, render(), ledger, self.clock)
        except OSError as e:
            logger.error("Failed to write %s: %s", rel_path, e)
            return ArtifactResult(path=rel_path, state=WriteState.FAILED, error=str(e))
        return ArtifactResult(path=rel_path, state=WriteState.WRITTEN)
