from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .column_map import ColumnId

"""OrderRecord model: one spreadsheet data row after validation and normalization."""

__all__ = [
    "RawRow",
    "OrderRecord",
]

# 列ラベル -> 生セル値。空セルはキー自体が存在しない
RawRow = dict[ColumnId, Any]


@dataclass(frozen=True)
class OrderRecord:
    """Validated order line ready for merging.

    All text fields are already trimmed/normalized; ``row_index`` is the
    zero-based position of the source row in the raw row sequence.
    """
    row_index: int
    order_id: str
    phone: str  # 数字のみ
    zip: str  # DDD-DDDD or 原文
    address: str  # 都道府県+市区町村+町名+詳細住所1(+(詳細住所2))
    name: str
    product_name: str
    quantity: int  # > 0

    @property
    def merge_key(self) -> str:
        """Composite shipment identity: phone|zip|address|name."""
        return f"{self.phone}|{self.zip}|{self.address}|{self.name}"
