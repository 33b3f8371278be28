from __future__ import annotations

import pytest

from order_manifest.models.config_models import ManifestConfig, SenderConfig
from order_manifest.models.log_entry import LogType
from order_manifest.models.shipment_group import OrderedIdSet, Receiver, ShipmentGroup
from order_manifest.services.errors import NoValidOrdersError
from order_manifest.services.output_builder import OUTPUT_HEADERS, build_output, build_output_row


def _group(name: str, ids: list[str], products: list[str]) -> ShipmentGroup:
    receiver = Receiver(name=name, phone="09012345678", zip="123-4567", address="東京都千代田区")
    return ShipmentGroup(
        merge_key=f"09012345678|123-4567|東京都千代田区|{name}",
        receiver=receiver,
        order_ids=OrderedIdSet(ids),
        products=list(products),
    )


def test_output_row_has_fixed_schema():
    row = build_output_row(1, _group("田中", ["A1", "A2"], ["Box*4", "Box*8"]), ManifestConfig())
    assert len(row) == len(OUTPUT_HEADERS) == 22
    assert row == [
        1, 9, 1800800001, "", "",
        "09012345678", "123-4567", "東京都千代田区", "田中",
        "", "", "", "",
        "455-0065", "名古屋市港区本宮新町86", "AIRUPA物流センター",
        "Box*4\nBox*8", 20, "", 0, 0,
        "A1\nA2",
    ]


def test_sender_comes_from_config():
    config = ManifestConfig(sender=SenderConfig(name="Other", zip="100-0001", address="東京都"))
    row = build_output_row(1, _group("x", ["A1"], ["P*1"]), config)
    assert row[13:16] == ["100-0001", "東京都", "Other"]


def test_sequence_numbers_and_merge_logs():
    groups = [
        _group("田中", ["A1", "A2"], ["Box*4", "Box*8"]),
        _group("佐藤", ["B1"], ["Cap*1"]),
    ]
    table = build_output(groups, valid_lines=3)
    assert [r[0] for r in table.rows] == [1, 2]
    assert [entry.type for entry in table.logs] == [LogType.MERGE, LogType.WARNING]
    assert table.logs[0].message == "MERGED: 田中 has 2 orders combined. IDs: A1, A2"
    assert table.logs[1].message == "ATTENTION: 1 orders were merged into existing shipments."


def test_no_merge_summary_is_info():
    table = build_output([_group("佐藤", ["B1"], ["Cap*1"])], valid_lines=1)
    assert len(table.logs) == 1
    assert table.logs[0].type is LogType.INFO
    assert table.logs[0].message == "1 orders processed. No merges required."


def test_multi_line_order_without_merge_is_still_a_warning():
    # 同一注文IDの2行: merge ログなし、行数 > グループ数なので warning
    table = build_output([_group("佐藤", ["B1"], ["Cap*1", "Mug*2"])], valid_lines=2)
    assert [entry.type for entry in table.logs] == [LogType.WARNING]


def test_zero_groups_is_fatal():
    with pytest.raises(NoValidOrdersError, match="No valid orders"):
        build_output([], valid_lines=0)
