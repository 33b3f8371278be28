from __future__ import annotations

import pytest

from order_manifest.models.column_map import Layout
from order_manifest.services.errors import HeaderNotFoundError
from order_manifest.services.header_detector import detect_header, is_fixed_layout_header

from conftest import fixed_header, fixed_row


def test_fixed_layout_header_detected_after_banner_rows():
    rows = [{"A": "Title"}, {"B": "note"}, fixed_header(), fixed_row()]
    detection = detect_header(rows)
    assert detection.index == 2
    assert detection.layout is Layout.FIXED


def test_fixed_layout_signature_is_case_insensitive():
    assert is_fixed_layout_header({"A": "Order ID", "AW": "Recipient PHONE"})
    assert not is_fixed_layout_header({"A": "Order ID"})
    assert not is_fixed_layout_header({"A": "Seller", "AW": "Phone"})


def test_generic_header_detected_by_keywords():
    rows = [
        {"A": "Export"},
        {"A": "No.", "B": "Order ID", "C": "Phone", "D": "Name"},
        {"A": 1, "B": "X1", "C": "09012345678", "D": "Sato"},
    ]
    detection = detect_header(rows)
    assert detection.index == 1
    assert detection.layout is Layout.GENERIC


def test_generic_header_matches_japanese_keywords():
    rows = [{"A": "注文ID", "B": "電話番号"}, {"A": "x"}]
    detection = detect_header(rows)
    assert detection.index == 0
    assert detection.layout is Layout.GENERIC


def test_single_keyword_is_not_enough():
    rows = [{"A": "order id", "B": "Customer"}, {"A": "x"}]
    with pytest.raises(HeaderNotFoundError):
        detect_header(rows)


def test_fixed_layout_wins_over_earlier_generic_row():
    generic = {"B": "orderid", "C": "phone"}
    rows = [generic, {"A": "x"}, fixed_header(), fixed_row()]
    detection = detect_header(rows)
    assert detection.index == 2
    assert detection.layout is Layout.FIXED


def test_first_matching_row_wins():
    rows = [{"A": "x"}, {"B": "orderid", "C": "phone"}, {"B": "order id", "C": "電話番号"}]
    assert detect_header(rows).index == 1


def test_rows_beyond_scan_limit_are_ignored():
    rows = [{"A": f"banner {i}"} for i in range(20)] + [fixed_header(), fixed_row()]
    with pytest.raises(HeaderNotFoundError):
        detect_header(rows)
    assert detect_header(rows, scan_limit=21).index == 20


def test_header_not_found_message_mentions_expected_columns():
    with pytest.raises(HeaderNotFoundError, match="Phone"):
        detect_header([{"A": "a"}, {"A": "b"}])
