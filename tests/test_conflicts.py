"""
Tests for manual-edit detection.
"""

import os
from pathlib import Path

import pytest

from src.core.persistence.mtime_ledger import ModificationLedger
from src.core.services.docs.conflicts import (
    WriteDecision,
    decide_write,
    is_conflict,
    on_disk_mtime,
    was_modified_manually,
)


class TestDecideWrite:
    """The pure decision table."""

    @pytest.mark.parametrize("force", [False, True])
    def test_never_written(self, force: bool):
        assert decide_write(None, 500, force) is WriteDecision.WRITE

    @pytest.mark.parametrize("force", [False, True])
    def test_missing_on_disk(self, force: bool):
        assert decide_write(500, None, force) is WriteDecision.WRITE

    def test_unchanged_since_write(self):
        assert decide_write(500, 500, False) is WriteDecision.WRITE

    def test_older_than_record(self):
        assert decide_write(500, 499, False) is WriteDecision.WRITE

    def test_edited_skips(self):
        assert decide_write(500, 501, False) is WriteDecision.SKIP_WARN

    def test_edited_with_force_overwrites(self):
        assert decide_write(500, 501, True) is WriteDecision.OVERWRITE_WARN

    def test_is_conflict_is_strict(self):
        assert not is_conflict(10, 10)
        assert is_conflict(10, 11)


class TestOnDisk:
    """Reading modification times from the filesystem."""

    def test_missing_file(self, tmp_path: Path):
        assert on_disk_mtime(tmp_path / "nope.md") is None

    def test_whole_seconds(self, tmp_path: Path):
        path = tmp_path / "page.md"
        path.write_text("x")
        os.utime(path, (1234.75, 1234.75))
        assert on_disk_mtime(path) == 1234


class TestWasModifiedManually:
    """Ledger + filesystem together."""

    def test_untracked_file(self, tmp_path: Path):
        (tmp_path / "page.md").write_text("x")
        ledger = ModificationLedger(tmp_path / ".filemtimes")
        assert was_modified_manually(ledger, "page.md", tmp_path) is False

    def test_tracked_but_deleted(self, tmp_path: Path):
        ledger = ModificationLedger(tmp_path / ".filemtimes", {"page.md": 100})
        assert was_modified_manually(ledger, "page.md", tmp_path) is False

    def test_tracked_and_untouched(self, tmp_path: Path):
        path = tmp_path / "page.md"
        path.write_text("x")
        os.utime(path, (100, 100))
        ledger = ModificationLedger(tmp_path / ".filemtimes", {"page.md": 100})
        assert was_modified_manually(ledger, "page.md", tmp_path) is False

    def test_tracked_and_edited(self, tmp_path: Path):
        path = tmp_path / "groups" / "users.md"
        path.parent.mkdir()
        path.write_text("edited by hand")
        os.utime(path, (200, 200))
        ledger = ModificationLedger(tmp_path / ".filemtimes", {"groups/users.md": 100})
        assert was_modified_manually(ledger, "groups/users.md", tmp_path) is True
