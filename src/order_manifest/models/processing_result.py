from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .column_map import Layout
from .log_entry import LogEntry, LogType

"""Processing result models for the order manifest builder.

ManifestResult is what one run hands back to its caller (CLI or any other
front end): the output table, the processing log and aggregate statistics.
BatchResult aggregates several file runs for the SUMMARY line.
"""


class RunStatus(Enum):
    """Outcome of a single file run: success | failed."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ManifestStats:
    """Per-run counters.

    valid_lines counts rows that passed validation; groups counts shipment
    rows written. merged_orders = valid_lines - groups.
    """
    total_rows: int = 0  # 読み込んだ生行数 (ヘッダ含む)
    data_rows: int = 0  # ヘッダ以降の行数
    valid_lines: int = 0  # 検証通過行数
    skipped_rows: int = 0  # 無言スキップ行数
    groups: int = 0  # 出力行数
    merge_groups: int = 0  # order id が2件以上のグループ数

    @property
    def merged_orders(self) -> int:
        return self.valid_lines - self.groups


@dataclass(frozen=True)
class ManifestResult:
    """Result of consolidating one order sheet."""
    status: RunStatus
    output_rows: list[list[Any]] | None  # 22列の出力行 (失敗時 None)
    logs: list[LogEntry]
    stats: ManifestStats = field(default_factory=ManifestStats)
    layout: Layout | None = None
    header_index: int | None = None
    error: str | None = None  # 失敗理由

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @property
    def has_merges(self) -> bool:
        return self.stats.valid_lines > self.stats.groups

    def logs_of(self, log_type: LogType) -> list[LogEntry]:
        return [entry for entry in self.logs if entry.type is log_type]


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome used by the batch summary."""
    file_name: str
    status: str  # success/failed
    valid_lines: int
    shipments: int
    output_path: str | None = None
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results across all files handled by one CLI invocation."""
    success_files: int
    failed_files: int
    total_valid_lines: int
    total_shipments: int
    total_merged_orders: int
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
