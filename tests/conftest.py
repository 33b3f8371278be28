# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
from openpyxl.utils import column_index_from_string

from order_manifest.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "output").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MANIFEST_SOURCE_DIR", raising=False)
        monkeypatch.delenv("MANIFEST_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


def fixed_header() -> dict[str, Any]:
    """Header row of the TikTok Shop export (only the columns the tool reads)."""
    return {
        "A": "注文ID",
        "G": "商品名",
        "J": "数量",
        "AL": "受取人",
        "AP": "郵便番号",
        "AQ": "都道府県",
        "AR": "市区町村",
        "AS": "町名",
        "AT": "詳細住所1",
        "AU": "詳細住所2",
        "AW": "電話番号",
    }


def fixed_row(
    order_id: Any = "ORD-1",
    phone: Any = "09012345678",
    zip_code: Any = "1234567",
    name: Any = "田中",
    product: Any = "Box*4",
    quantity: Any = 1,
    prefecture: Any = "東京都",
    city: Any = "千代田区",
    town: Any = "丸の内",
    addr1: Any = "1-1-1",
    addr2: Any = None,
) -> dict[str, Any]:
    row = {
        "A": order_id,
        "G": product,
        "J": quantity,
        "AL": name,
        "AP": zip_code,
        "AQ": prefecture,
        "AR": city,
        "AS": town,
        "AT": addr1,
        "AU": addr2,
        "AW": phone,
    }
    # RawRow は空セルのキーを持たない
    return {k: v for k, v in row.items() if v is not None and v != ""}


def make_excel(path: Path, rows: list[dict[str, Any]], sheet: str = "Orders") -> Path:
    """Write letter-keyed rows to an .xlsx (first sheet, no header interpretation)."""
    width = max(
        (column_index_from_string(col) for row in rows for col in row),
        default=1,
    )
    matrix = [[None] * width for _ in rows]
    for i, row in enumerate(rows):
        for col, value in row.items():
            matrix[i][column_index_from_string(col) - 1] = value
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(matrix).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def fixed_layout_rows() -> list[dict[str, Any]]:
    """Banner row, header, instruction row, then two orders for the same receiver."""
    return [
        {"A": "TikTok Shop 注文エクスポート"},
        fixed_header(),
        {"A": "注文の一意な識別子", "AW": "例: 090-xxxx"},
        fixed_row(order_id="ORD-1", quantity=1),
        fixed_row(order_id="ORD-2", quantity=2),
    ]


@pytest.fixture()
def orders_xlsx(temp_workdir: Path, fixed_layout_rows) -> Path:
    return make_excel(temp_workdir / "data" / "orders.xlsx", fixed_layout_rows)
