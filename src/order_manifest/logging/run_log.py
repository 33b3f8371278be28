from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from ..models.log_entry import LogEntry, LogType
from .init import MERGE_LEVEL

"""Per-run processing log.

RunLog is the append-only LogEntry sequence of one run. It can be replayed to
the labeled console logger and flushed as JSON Lines:
- fixed schema {"type", "message"}
- `<log_directory>/manifest-YYYYMMDD-HHMMSS.log` (UTC), path fixed on first access
- serial use only (one run at a time)
"""

__all__ = [
    "RunLog",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

_LEVELS = {
    LogType.INFO: logging.INFO,
    LogType.MERGE: MERGE_LEVEL,
    LogType.WARNING: logging.WARNING,
    LogType.ERROR: logging.ERROR,
}


class RunLog:
    """In-memory log of one run. Flush appends JSON Lines to a file."""

    def __init__(self, log_directory: Path | str | None = None) -> None:
        self._entries: list[LogEntry] = []
        self._log_directory = Path(log_directory) if log_directory is not None else Path("./logs")
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._log_directory.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_directory / f"manifest-{stamp}.log"
        return self._file_path

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def extend(self, entries: Iterable[LogEntry]) -> None:
        self._entries.extend(entries)

    def info(self, message: str) -> None:
        self.append(LogEntry.info(message))

    def error(self, message: str) -> None:
        self.append(LogEntry.error(message))

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._entries)

    def emit(self, logger: logging.Logger, prefix: str = "") -> None:
        """Replay entries through ``logger`` at the level matching their type.

        Args:
            logger: Labeled application logger
            prefix: Prepended to every message (e.g. ``"[orders.xlsx] "``)
        """
        for entry in self._entries:
            logger.log(_LEVELS[entry.type], f"{prefix}{entry.message}")

    def flush(self) -> Path:
        """Append buffered entries to the log file as JSON Lines and clear the buffer.

        Returns:
            Path of the log file (created on first access even when nothing is buffered)

        Raises:
            OSError: the log directory or file is not writable
        """
        fp = self.file_path
        if not self._entries:
            return fp
        with fp.open("a", encoding="utf-8") as f:
            for entry in self._entries:
                f.write(entry.to_json_line() + "\n")
        self._entries.clear()
        return fp
