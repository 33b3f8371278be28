from __future__ import annotations

from typing import Any

from ..models.column_map import ADDRESS_FIELDS, ColumnId, ColumnMap
from ..models.order_record import OrderRecord, RawRow
from .normalizer import cell_text, format_phone, format_zip, parse_quantity

"""Row validation and normalization.

validate_row() returns an OrderRecord for a usable order line, or None for a
row that must be skipped (instruction / example rows, repeated headers,
zero-quantity lines). Skips are silent; only aggregate counts are reported.
"""

__all__ = [
    "build_address",
    "validate_row",
]

DEFAULT_PRODUCT_COLUMN: ColumnId = "G"
DEFAULT_QUANTITY_COLUMN: ColumnId = "J"
DEFAULT_MIN_PHONE_DIGITS = 8


def _cell(row: RawRow, column_map: ColumnMap, field_name: str) -> Any:
    column = column_map.get(field_name)
    if column is None:
        return None
    return row.get(column)


def build_address(row: RawRow, column_map: ColumnMap) -> str:
    """都道府県 + 市区町村 + 町名 + 詳細住所1, then "(詳細住所2)" when present."""
    parts = [
        cell_text(value).strip()
        for value in (_cell(row, column_map, f) for f in ADDRESS_FIELDS)
        if value
    ]
    addr2 = cell_text(_cell(row, column_map, "addr2")).strip()
    if addr2:
        parts.append(f"({addr2})")
    return "".join(parts)


def validate_row(
    row: RawRow,
    column_map: ColumnMap,
    header_row: RawRow,
    *,
    row_index: int = -1,
    product_column: ColumnId = DEFAULT_PRODUCT_COLUMN,
    quantity_column: ColumnId = DEFAULT_QUANTITY_COLUMN,
    min_phone_digits: int = DEFAULT_MIN_PHONE_DIGITS,
) -> OrderRecord | None:
    """Validate and normalize one data row.

    Skip conditions, checked in this order:
    1. order id cell empty
    2. order id equals the header's order id text (header repeated in data)
    3. phone has fewer than ``min_phone_digits`` digits (instruction/example rows)
    4. order id blank after trimming
    5. quantity not > 0
    """
    raw_order_id = _cell(row, column_map, "orderId")
    if not raw_order_id:
        return None

    order_id = cell_text(raw_order_id).strip()
    header_order_id = cell_text(_cell(header_row, column_map, "orderId")).strip()
    if order_id == header_order_id:
        return None

    phone = format_phone(_cell(row, column_map, "phone"))
    if len(phone) < min_phone_digits:
        return None

    if not order_id:
        return None

    quantity = parse_quantity(row.get(quantity_column))
    if quantity <= 0:
        return None

    return OrderRecord(
        row_index=row_index,
        order_id=order_id,
        phone=phone,
        zip=format_zip(_cell(row, column_map, "zip")),
        address=build_address(row, column_map),
        name=cell_text(_cell(row, column_map, "name")).strip(),
        product_name=cell_text(row.get(product_column)).strip(),
        quantity=quantity,
    )
