"""
Manual-edit detection — has someone touched a generated file?

A file counts as manually modified when its on-disk modification time
is strictly later than the last time we recorded writing it. Files the
ledger has never seen are never conflicts. Neither are files that have
vanished from disk since we last wrote them: there is nothing left to
protect, so they are simply regenerated.

``decide_write`` is the pure half (plain values in, decision out);
``on_disk_mtime`` / ``was_modified_manually`` are the thin I/O half.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

from src.core.persistence.mtime_ledger import ModificationLedger

logger = logging.getLogger(__name__)


class WriteDecision(str, enum.Enum):
    """What to do with one generated file this run."""

    WRITE = "write"                    # no conflict
    SKIP_WARN = "skip"                 # manually edited, leave it alone
    OVERWRITE_WARN = "overwrite"       # manually edited, but --force


def is_conflict(recorded: int | None, on_disk: int | None) -> bool:
    if recorded is None or on_disk is None:
        return False
    return on_disk > recorded


def decide_write(recorded: int | None, on_disk: int | None, force: bool) -> WriteDecision:
    """Decide how to handle a file given its ledger and on-disk times.

    Args:
        recorded: Timestamp from the ledger, or None if never written.
        on_disk: Current modification time (whole seconds), or None if
            the file doesn't exist.
        force: Discard manual edits instead of skipping.
    """
    if not is_conflict(recorded, on_disk):
        return WriteDecision.WRITE
    return WriteDecision.OVERWRITE_WARN if force else WriteDecision.SKIP_WARN


def on_disk_mtime(path: Path) -> int | None:
    """Modification time of ``path`` in whole seconds, or None if missing."""
    try:
        return int(path.stat().st_mtime)
    except FileNotFoundError:
        return None


def was_modified_manually(ledger: ModificationLedger, file_path: str, root: Path) -> bool:
    """True iff ``file_path`` (relative to ``root``) changed since we wrote it."""
    recorded = ledger.get(file_path)
    if recorded is None:
        return False

    on_disk = on_disk_mtime(root / file_path)
    if on_disk is None:
        logger.debug("Ledger tracks %s but it no longer exists", file_path)
        return False
    return is_conflict(recorded, on_disk)
