from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum

"""LogEntry model for the processing log.

The processing log is the user-facing outcome of a run (merges, summary,
fatal errors). Entries carry no timestamp so that re-running the same input
yields identical log content; the JSON Lines form is a fixed two-key schema.
"""

__all__ = [
    "LogType",
    "LogEntry",
]


class LogType(str, Enum):
    INFO = "info"
    MERGE = "merge"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """Single processing log line.

    Attributes:
        type: info | merge | warning | error
        message: human readable text shown to the operator
    """
    type: LogType
    message: str

    @staticmethod
    def info(message: str) -> LogEntry:
        return LogEntry(LogType.INFO, message)

    @staticmethod
    def merge(message: str) -> LogEntry:
        return LogEntry(LogType.MERGE, message)

    @staticmethod
    def warning(message: str) -> LogEntry:
        return LogEntry(LogType.WARNING, message)

    @staticmethod
    def error(message: str) -> LogEntry:
        return LogEntry(LogType.ERROR, message)

    def to_json_line(self) -> str:
        """Serialize to a JSON Lines record (keys: type, message)."""
        data = asdict(self)
        data["type"] = self.type.value
        return json.dumps(data, ensure_ascii=False)
