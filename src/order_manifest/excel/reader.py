from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from ..models.order_record import RawRow

"""Workbook reader.

Reads the first sheet (or a named one) without any header interpretation:
header detection is the core's job. Every row becomes a RawRow keyed by the
spreadsheet column letter ("A", "B", ..., "AW").

- 全セル空の行はスキップ
- 空セル (NaN) はキー自体を持たない
- 整数値の float (1234567.0) は int に戻す
"""

__all__ = [
    "WorkbookReadError",
    "read_order_rows",
    "dataframe_to_rows",
]


class WorkbookReadError(Exception):
    """Raised when the workbook cannot be opened or the sheet is missing."""


def _clean_value(val: Any) -> Any:
    if isinstance(val, float) and val.is_integer():
        return int(val)
    return val


def dataframe_to_rows(df: pd.DataFrame) -> list[RawRow]:
    """Convert a header-less DataFrame into letter-keyed RawRows."""
    letters = [get_column_letter(i + 1) for i in range(df.shape[1])]
    rows: list[RawRow] = []
    for raw in df.itertuples(index=False, name=None):
        row: RawRow = {}
        for letter, val in zip(letters, raw, strict=False):
            if val is None or (not isinstance(val, str) and pd.isna(val)):
                continue
            row[letter] = _clean_value(val)
        if not row:
            continue
        rows.append(row)
    return rows


def read_order_rows(path: Path, sheet: str | int = 0) -> list[RawRow]:
    """Read one sheet of an order export into RawRows.

    Parameters
    ----------
    path: .xlsx ファイルパス
    sheet: シート名または 0 始まりのシート番号 (既定: 先頭シート)
    """
    try:
        df = pd.read_excel(
            path,
            sheet_name=sheet,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_values=[""],
            engine="openpyxl",
        )
    except (OSError, ValueError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
        raise WorkbookReadError(f"failed to read workbook {path}: {e}") from e
    return dataframe_to_rows(df)
