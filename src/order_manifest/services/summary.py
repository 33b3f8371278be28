from __future__ import annotations

from ..models.processing_result import BatchResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total} success={success} failed={failed} lines={lines}
shipments={shipments} merged={merged} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line for a batch.

    >>> r = BatchResult(success_files=1, failed_files=0, total_valid_lines=12,
    ...                 total_shipments=10, total_merged_orders=2, elapsed_seconds=2.0)
    >>> render_summary_line(r)
    'SUMMARY files=1 success=1 failed=0 lines=12 shipments=10 merged=2 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"lines={result.total_valid_lines} "
        f"shipments={result.total_shipments} "
        f"merged={result.total_merged_orders} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
