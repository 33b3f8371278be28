from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.column_map import ColumnId, Layout
from ..models.order_record import RawRow
from .errors import HeaderNotFoundError
from .normalizer import cell_text

"""Header row detection.

Order exports put an unpredictable number of banner / instruction rows above
the real header. Detection runs in two passes over the first rows:

1. Fixed-layout signature: order id in column A and phone in column AW (the
   TikTok Shop export). This pass runs to completion first, so the fixed
   layout wins even when a later row would satisfy the keyword pass.
2. Keyword scan: the first row where at least two header keywords appear in
   any cell.
"""

__all__ = [
    "HeaderDetection",
    "detect_header",
    "is_fixed_layout_header",
    "DEFAULT_SCAN_LIMIT",
]

logger = logging.getLogger(__name__)

DEFAULT_SCAN_LIMIT = 20

FIXED_ORDER_ID_COLUMN: ColumnId = "A"
FIXED_PHONE_COLUMN: ColumnId = "AW"
_FIXED_ORDER_ID_MARKERS = ("id", "注文")
_FIXED_PHONE_MARKERS = ("phone", "電話")

HEADER_KEYWORDS: tuple[str, ...] = (
    "電話番号",
    "phone",
    "telephone",
    "注文ID",
    "order id",
    "orderid",
)


@dataclass(frozen=True)
class HeaderDetection:
    index: int  # 0 始まりの行番号
    layout: Layout


def _lower_cell(row: RawRow, column: ColumnId) -> str:
    value = row.get(column)
    return cell_text(value).casefold() if value else ""


def is_fixed_layout_header(row: RawRow) -> bool:
    """True when ``row`` carries the fixed-layout signature (A: order id, AW: phone)."""
    order_id_text = _lower_cell(row, FIXED_ORDER_ID_COLUMN)
    phone_text = _lower_cell(row, FIXED_PHONE_COLUMN)
    return any(m in order_id_text for m in _FIXED_ORDER_ID_MARKERS) and any(
        m in phone_text for m in _FIXED_PHONE_MARKERS
    )


def _keyword_hits(row: RawRow) -> int:
    values = [cell_text(v).casefold() for v in row.values()]
    return sum(1 for kw in HEADER_KEYWORDS if any(kw.casefold() in v for v in values))


def detect_header(rows: Sequence[RawRow], scan_limit: int = DEFAULT_SCAN_LIMIT) -> HeaderDetection:
    """Locate the header row within the first ``scan_limit`` rows.

    Args:
        rows: Raw rows of one sheet
        scan_limit: Number of leading rows examined

    Returns:
        HeaderDetection with the 0-based row index and the detected layout

    Raises:
        HeaderNotFoundError: neither pass matched any scanned row
    """
    scanned = rows[:scan_limit]

    for i, row in enumerate(scanned):
        if is_fixed_layout_header(row):
            logger.debug("fixed-layout header at row %d", i)
            return HeaderDetection(index=i, layout=Layout.FIXED)

    # フォールバック: キーワード2個以上を含む最初の行
    for i, row in enumerate(scanned):
        if _keyword_hits(row) >= 2:
            logger.debug("generic header at row %d", i)
            return HeaderDetection(index=i, layout=Layout.GENERIC)

    raise HeaderNotFoundError(
        "Could not find a valid header row (looking for 'Phone', 'Order ID')."
    )
