from __future__ import annotations

import pytest

from order_manifest.models.column_map import Layout
from order_manifest.services.column_mapper import FIXED_LAYOUT_COLUMNS, build_column_map
from order_manifest.services.errors import MissingColumnsError


def test_fixed_layout_uses_static_table_regardless_of_text():
    header = {"A": "注文ID", "AW": "電話番号", "B": "Phone", "C": "Zip"}
    column_map = build_column_map(header, Layout.FIXED)
    assert column_map.layout is Layout.FIXED
    assert column_map.columns == FIXED_LAYOUT_COLUMNS
    assert column_map["phone"] == "AW"
    assert column_map["orderId"] == "A"


def test_generic_layout_maps_by_keywords():
    header = {
        "A": "Order ID",
        "B": "Recipient",
        "C": "Telephone",
        "D": "Postal Code",
        "E": "都道府県",
        "F": "市区町村",
        "H": "町名",
        "I": "詳細住所1",
        "K": "詳細住所2",
    }
    column_map = build_column_map(header, Layout.GENERIC)
    assert column_map.columns == {
        "orderId": "A",
        "name": "B",
        "phone": "C",
        "zip": "D",
        "prefecture": "E",
        "city": "F",
        "town": "H",
        "addr1": "I",
        "addr2": "K",
    }


def test_generic_layout_trims_and_ignores_case():
    header = {"A": "  ORDERID ", "B": " PHONE", "C": "ZIP", "D": "NAME"}
    column_map = build_column_map(header, Layout.GENERIC)
    assert column_map["orderId"] == "A"
    assert column_map["phone"] == "B"


def test_generic_layout_last_matching_column_wins():
    header = {
        "A": "Order ID",
        "B": "Name",
        "C": "Phone",
        "D": "Zip",
        "E": "Product Name",  # "name" を含むので name を上書き
    }
    column_map = build_column_map(header, Layout.GENERIC)
    assert column_map["name"] == "E"


def test_generic_layout_one_cell_can_feed_several_fields():
    header = {"A": "注文ID", "B": "受取人電話番号", "C": "郵便番号"}
    column_map = build_column_map(header, Layout.GENERIC)
    assert column_map["phone"] == "B"
    assert column_map["name"] == "B"


def test_missing_required_columns_reports_fields_and_layout():
    header = {"A": "Order ID", "B": "Phone"}
    with pytest.raises(MissingColumnsError) as exc:
        build_column_map(header, Layout.GENERIC)
    assert exc.value.missing == ["zip", "name"]
    assert str(exc.value) == "Missing required columns: zip, name. Format detected: Generic"


def test_optional_address_fields_may_be_absent():
    header = {"A": "Order ID", "B": "Phone", "C": "Zip", "D": "Name"}
    column_map = build_column_map(header, Layout.GENERIC)
    assert column_map.get("prefecture") is None
    assert column_map.missing() == []
