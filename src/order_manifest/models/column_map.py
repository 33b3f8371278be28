from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""ColumnMap model and Layout enum for the order manifest builder.

A ColumnMap ties semantic order fields (phone, zip, name, ...) to physical
spreadsheet columns. Column identifiers are letter labels ("A", "AW") and are
kept as opaque string keys, never as positional indexes.
"""

__all__ = [
    "ColumnId",
    "Layout",
    "ColumnMap",
    "REQUIRED_FIELDS",
    "ADDRESS_FIELDS",
]

# 列ラベル ("A", "AW" ...)。意味フィールド名と混同しないための別名
ColumnId = str

REQUIRED_FIELDS: tuple[str, ...] = ("phone", "zip", "name", "orderId")
ADDRESS_FIELDS: tuple[str, ...] = ("prefecture", "city", "town", "addr1")


class Layout(Enum):
    """Input layout classification produced by header detection.

    - FIXED: the known TikTok Shop export, detected by a positional signature
    - GENERIC: any other arrangement, discovered by header keywords
    """
    FIXED = "fixed"
    GENERIC = "generic"

    @property
    def label(self) -> str:
        return "Standard TikTok" if self is Layout.FIXED else "Generic"


@dataclass
class ColumnMap:
    """Semantic field name -> column identifier for a single input file."""
    layout: Layout
    columns: dict[str, ColumnId] = field(default_factory=dict)

    def get(self, field_name: str) -> ColumnId | None:
        return self.columns.get(field_name)

    def __getitem__(self, field_name: str) -> ColumnId:
        return self.columns[field_name]

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.columns

    def assign(self, field_name: str, column: ColumnId) -> None:
        self.columns[field_name] = column

    def missing(self, required: tuple[str, ...] = REQUIRED_FIELDS) -> list[str]:
        """Return required fields that did not resolve to any column (in required order)."""
        return [name for name in required if not self.columns.get(name)]
