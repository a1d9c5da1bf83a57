"""
Modification ledger — when did we last write each generated file?

Stored as a small text file (``<source_dir>/.filemtimes``): a fixed
two-line comment header followed by one ``path=timestamp`` line per
tracked file, in insertion order. Timestamps are integer Unix seconds.

The ledger is the only record of what the tool wrote. It is loaded
once per run, updated in memory as files are written, and persisted
once at the end. A missing or damaged ledger is never fatal; the run
just starts with an empty one.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

LEDGER_HEADER = (
    "# GENERATED. YOU SHOULDN'T MODIFY OR DELETE THIS FILE.\n"
    "# routedocs uses this file to know when you change something manually in your docs.\n"
)
_HEADER_LINES = 2


class ModificationLedger:
    """Ordered ``path -> last write timestamp`` mapping backed by a file."""

    def __init__(self, path: Path, entries: dict[str, int] | None = None):
        self._path = path
        self._entries: dict[str, int] = dict(entries or {})

    @property
    def path(self) -> Path:
        return self._path

    @classmethod
    def load(cls, path: Path) -> ModificationLedger:
        """Load the ledger from ``path``.

        The first two lines are the header and are ignored. Lines that
        don't parse as ``path=timestamp`` are skipped with a warning.
        """
        if not path.is_file():
            logger.info("No modification ledger at %s — starting fresh", path)
            return cls(path)

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read modification ledger %s: %s — starting fresh", path, e)
            return cls(path)

        entries: dict[str, int] = {}
        for lineno, line in enumerate(raw.splitlines()[_HEADER_LINES:], start=_HEADER_LINES + 1):
            if not line.strip():
                continue
            file_path, sep, stamp = line.rpartition("=")
            if not sep or not file_path:
                logger.warning("Ignoring malformed ledger line %d in %s: %r", lineno, path, line)
                continue
            try:
                entries[file_path] = int(stamp.strip())
            except ValueError:
                logger.warning("Ignoring bad timestamp on ledger line %d in %s: %r", lineno, path, line)

        logger.debug("Loaded %d ledger entries from %s", len(entries), path)
        return cls(path, entries)

    def get(self, file_path: str) -> int | None:
        """Recorded write time for ``file_path``, or None if never written."""
        return self._entries.get(file_path)

    def record(self, file_path: str, timestamp: int) -> None:
        self._entries[file_path] = int(timestamp)

    def entries(self) -> dict[str, int]:
        return dict(self._entries)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def serialize(self) -> str:
        body = "\n".join(f"{p}={t}" for p, t in self._entries.items())
        return LEDGER_HEADER + body

    def persist(self) -> None:
        """Overwrite the ledger file with the current entries (atomic write)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = self.serialize()

        _fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=".filemtimes_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(self._path)
        except Exception:
            tmp.unlink(missing_ok=True)
            logger.error("Failed to save modification ledger to %s", self._path)
            raise

        logger.debug("Saved %d ledger entries to %s", len(self._entries), self._path)
