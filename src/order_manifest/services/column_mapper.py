from __future__ import annotations

import logging

from ..models.column_map import ColumnId, ColumnMap, Layout, REQUIRED_FIELDS
from ..models.order_record import RawRow
from .errors import MissingColumnsError
from .normalizer import cell_text

"""Semantic column mapping.

Fixed layout: columns come from a static table, header text is not read.
Generic layout: every header cell is matched against per-field keyword lists.

Generic matching keeps the historical "last match wins" rule: a later header
cell overrides an earlier one for the same field, and a single cell may be
assigned to several fields (e.g. "受取人電話番号" hits both phone and name).
"""

__all__ = [
    "FIXED_LAYOUT_COLUMNS",
    "FIELD_KEYWORDS",
    "build_column_map",
]

logger = logging.getLogger(__name__)

# TikTok Shop 注文エクスポートの固定列
FIXED_LAYOUT_COLUMNS: dict[str, ColumnId] = {
    "orderId": "A",
    "name": "AL",
    "zip": "AP",
    "prefecture": "AQ",
    "city": "AR",
    "town": "AS",
    "addr1": "AT",
    "addr2": "AU",
    "phone": "AW",
}

FIELD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "phone": ("電話番号", "telephone", "phone"),
    "zip": ("郵便番号", "zip", "postal"),
    "prefecture": ("都道府県",),
    "city": ("市区町村",),
    "town": ("町名",),
    "addr1": ("詳細住所1",),
    "addr2": ("詳細住所2",),
    "name": ("受取人", "name", "recipient"),
    "orderId": ("注文ID", "order id", "orderid"),
}


def _map_generic(header_row: RawRow) -> ColumnMap:
    column_map = ColumnMap(layout=Layout.GENERIC)
    for column, value in header_row.items():
        text = cell_text(value).strip().casefold()
        if not text:
            continue
        for field_name, keywords in FIELD_KEYWORDS.items():
            if any(kw.casefold() in text for kw in keywords):
                previous = column_map.get(field_name)
                if previous is not None and previous != column:
                    logger.debug("field %s remapped %s -> %s", field_name, previous, column)
                column_map.assign(field_name, column)
    return column_map


def build_column_map(header_row: RawRow, layout: Layout) -> ColumnMap:
    """Build the ColumnMap for one input file.

    Args:
        header_row: The detected header row
        layout: FIXED uses the static column table; GENERIC reads header text

    Returns:
        ColumnMap with every required field resolved

    Raises:
        MissingColumnsError: phone / zip / name / orderId not all resolved
    """
    if layout is Layout.FIXED:
        column_map = ColumnMap(layout=Layout.FIXED, columns=dict(FIXED_LAYOUT_COLUMNS))
    else:
        column_map = _map_generic(header_row)

    missing = column_map.missing(REQUIRED_FIELDS)
    if missing:
        raise MissingColumnsError(missing, layout.label)
    return column_map
