from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_order_rows
from ..excel.writer import manifest_filename, write_manifest
from ..logging.init import get_logger
from ..logging.run_log import RunLog
from ..models.config_models import ManifestConfig
from ..models.log_entry import LogEntry
from ..models.order_record import RawRow
from ..models.processing_result import (
    BatchResult,
    FileStat,
    ManifestResult,
    ManifestStats,
    RunStatus,
)
from .column_mapper import build_column_map
from .errors import EmptyInputError, ManifestError
from .header_detector import detect_header
from .merge_engine import MergeEngine
from .output_builder import build_output
from .progress import ManifestProgress
from .row_validator import validate_row

"""Service orchestration for the order manifest builder.

build_manifest() is the pure core: raw rows in, ManifestResult out, fatal
problems raised as ManifestError. Every piece of run state (merge groups,
log, counters) is local to one call, so successive runs never share
anything.

run_manifest() wraps the core for front ends (fatal error -> failed result
with one error log line); process_file() / process_all() add workbook I/O,
the output file and the batch summary.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal batch-level error (e.g. source directory missing)."""


def build_manifest(raw_rows: Sequence[RawRow], config: ManifestConfig | None = None) -> ManifestResult:
    """Consolidate raw order rows into manifest rows.

    Raises:
        ManifestError: empty input, no header, missing required columns or
            no valid orders
    """
    config = config or ManifestConfig()
    if len(raw_rows) < 2:
        raise EmptyInputError("File appears to be empty or invalid format.")

    detection = detect_header(raw_rows, scan_limit=config.header_scan_limit)
    header_row = raw_rows[detection.index]
    column_map = build_column_map(header_row, detection.layout)
    logger.debug(
        "header row=%d layout=%s columns=%s",
        detection.index,
        detection.layout.value,
        column_map.columns,
    )

    engine = MergeEngine()
    data_rows = 0
    for i in range(detection.index + 1, len(raw_rows)):
        data_rows += 1
        record = validate_row(
            raw_rows[i],
            column_map,
            header_row,
            row_index=i,
            product_column=config.product_column,
            quantity_column=config.quantity_column,
            min_phone_digits=config.min_phone_digits,
        )
        if record is None:
            continue
        engine.add(record)

    table = build_output(engine.groups, engine.record_count, config)

    stats = ManifestStats(
        total_rows=len(raw_rows),
        data_rows=data_rows,
        valid_lines=engine.record_count,
        skipped_rows=data_rows - engine.record_count,
        groups=len(table.rows),
        merge_groups=sum(1 for g in engine.groups if g.is_merged),
    )
    run_log = RunLog()
    run_log.extend(table.logs)
    run_log.info(
        f"Processed {stats.valid_lines} valid lines into {stats.groups} shipping entries."
    )
    return ManifestResult(
        status=RunStatus.SUCCESS,
        output_rows=table.rows,
        logs=run_log.entries,
        stats=stats,
        layout=detection.layout,
        header_index=detection.index,
    )


def run_manifest(raw_rows: Sequence[RawRow], config: ManifestConfig | None = None) -> ManifestResult:
    """Like build_manifest() but a fatal error becomes a failed result.

    The failed result carries exactly one error log entry and no output rows.
    """
    try:
        return build_manifest(raw_rows, config)
    except ManifestError as e:
        return _failed_result(str(e), total_rows=len(raw_rows))


def _failed_result(message: str, total_rows: int = 0) -> ManifestResult:
    return ManifestResult(
        status=RunStatus.FAILED,
        output_rows=None,
        logs=[LogEntry.error(f"Processing failed: {message}")],
        stats=ManifestStats(total_rows=total_rows),
        error=message,
    )


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    result: ManifestResult
    output_path: Path | None = None


def output_path_for(config: ManifestConfig, today: date | None = None) -> Path:
    name = manifest_filename(config.filename_prefix, config.filename_extension, today)
    return Path(config.output_directory) / name


def process_file(
    path: Path,
    config: ManifestConfig,
    today: date | None = None,
    output_path: Path | None = None,
) -> FileOutcome:
    """Read ``path``, build its manifest and write it.

    Workbook read/write failures are reported as a failed result, never raised.

    Args:
        path: Order export (.xlsx)
        config: Run configuration
        today: Date used in the output filename (default: local today)
        output_path: Explicit target; overrides output_directory + filename

    Returns:
        FileOutcome; ``output_path`` is set only when a manifest was written
    """
    try:
        raw_rows = read_order_rows(path)
    except WorkbookReadError as e:
        return FileOutcome(path=path, result=_failed_result(str(e)))

    result = run_manifest(raw_rows, config)
    if not result.ok or result.output_rows is None:
        return FileOutcome(path=path, result=result)

    target = output_path or output_path_for(config, today)
    try:
        write_manifest(result.output_rows, target)
    except OSError as e:
        return FileOutcome(path=path, result=_failed_result(f"failed to write manifest {target}: {e}"))
    logger.debug("manifest written: %s", target)
    return FileOutcome(path=path, result=result, output_path=target)


def scan_order_files(directory: Path) -> list[Path]:
    """List .xlsx files in ``directory`` (non-recursive, sorted, Excel lock files skipped).

    Raises:
        ProcessingError: directory missing, not a directory or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _next_output_path(base: Path, written: set[Path]) -> Path:
    # 同日に複数ファイルを処理すると同名になるため連番を付与 (書き込み済みの名前のみ避ける)
    candidate = base
    n = 2
    while candidate in written:
        candidate = base.with_name(f"{base.stem}-{n}{base.suffix}")
        n += 1
    return candidate


def process_all(
    files: Sequence[Path],
    config: ManifestConfig,
    today: date | None = None,
) -> BatchResult:
    """Process each file as an independent run and aggregate the outcome.

    Each run's processing log is replayed through the labeled console logger
    and, when ``config.log_directory`` is set, flushed as JSON Lines.

    Args:
        files: Order exports, processed in the given order
        config: Run configuration shared by every file
        today: Date used in output filenames (default: local today)

    Returns:
        BatchResult with per-file FileStat entries
    """
    app_logger = get_logger()
    start_time = datetime.now(UTC)
    run_log = RunLog(config.log_directory) if config.log_directory else None

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_lines = 0
    total_shipments = 0
    total_merged = 0
    written: set[Path] = set()

    with ManifestProgress(len(files), description="Processing orders") as progress:
        for file_path in files:
            progress.begin(file_path)
            file_start = datetime.now(UTC)

            target = _next_output_path(output_path_for(config, today), written)
            outcome = process_file(file_path, config, today=today, output_path=target)
            result = outcome.result
            elapsed = (datetime.now(UTC) - file_start).total_seconds()

            file_log = RunLog()
            file_log.extend(result.logs)
            file_log.emit(app_logger, prefix=f"[{file_path.name}] ")
            if run_log is not None:
                run_log.extend(result.logs)

            if result.ok and outcome.output_path is not None:
                written.add(outcome.output_path)
                success_count += 1
                total_lines += result.stats.valid_lines
                total_shipments += result.stats.groups
                total_merged += result.stats.merged_orders
                app_logger.info(f"[{file_path.name}] written: {outcome.output_path}")
            else:
                failed_count += 1

            progress.record(success=result.ok, shipments=result.stats.groups)

            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=result.status.value,
                    valid_lines=result.stats.valid_lines,
                    shipments=result.stats.groups,
                    output_path=str(outcome.output_path) if outcome.output_path else None,
                    elapsed_seconds=elapsed,
                )
            )

    if run_log is not None:
        try:
            path = run_log.flush()
            app_logger.debug(f"processing log written: {path}")
        except OSError as e:
            app_logger.warning(f"failed to write processing log: {e}")

    elapsed_seconds = (datetime.now(UTC) - start_time).total_seconds()
    return BatchResult(
        success_files=success_count,
        failed_files=failed_count,
        total_valid_lines=total_lines,
        total_shipments=total_shipments,
        total_merged_orders=total_merged,
        elapsed_seconds=elapsed_seconds,
        file_stats=file_stats,
    )
