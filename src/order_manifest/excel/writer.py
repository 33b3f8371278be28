from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils import get_column_letter

from ..services.output_builder import LEADING_BLANK_ROWS, OUTPUT_HEADERS

"""Manifest workbook writer.

Layout of the written sheet ("Sheet1"):
    rows 1-3: empty
    row 4:    OUTPUT_HEADERS
    row 5+:   manifest rows
Column widths follow the warehouse template.
"""

__all__ = [
    "COLUMN_WIDTHS",
    "SHEET_NAME",
    "manifest_filename",
    "manifest_frame",
    "write_manifest",
]

SHEET_NAME = "Sheet1"

COLUMN_WIDTHS: tuple[int, ...] = (
    5, 10, 15, 10, 5,
    15, 10, 40, 15, 10,
    10, 10, 15, 15, 30,
    20, 40, 10, 10, 10,
    10, 20,
)


def manifest_filename(
    prefix: str = "邮局小包-Capypie", extension: str = ".xlsx", today: date | None = None
) -> str:
    """``<prefix><MM>.<DD><extension>`` for ``today`` (local date by default)."""
    today = today or date.today()
    return f"{prefix}{today.month:02d}.{today.day:02d}{extension}"


def manifest_frame(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Full sheet content (blank rows + header + data) as a header-less DataFrame."""
    width = len(OUTPUT_HEADERS)
    blank = [None] * width
    data: list[list[Any]] = [list(blank) for _ in range(LEADING_BLANK_ROWS)]
    data.append(list(OUTPUT_HEADERS))
    data.extend(list(r) for r in rows)
    return pd.DataFrame(data, columns=range(width), dtype=object)


def write_manifest(rows: Sequence[Sequence[Any]], target: Path | BytesIO) -> Path | BytesIO:
    """Write manifest ``rows`` to ``target``.

    Args:
        rows: Output rows from build_output()
        target: .xlsx path (parent directories are created) or binary buffer

    Returns:
        ``target``
    """
    if isinstance(target, Path):
        target.parent.mkdir(parents=True, exist_ok=True)
    df = manifest_frame(rows)
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, header=False, index=False)
        ws = writer.sheets[SHEET_NAME]
        for i, width in enumerate(COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(i)].width = width
    return target
