from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..models.config_models import ManifestConfig
from ..models.log_entry import LogEntry
from ..models.shipment_group import ShipmentGroup
from .errors import NoValidOrdersError

"""Manifest table construction.

Turns shipment groups into the fixed 22-column warehouse sheet and produces
the merge / summary log lines for the run.
"""

__all__ = [
    "OUTPUT_HEADERS",
    "LEADING_BLANK_ROWS",
    "OutputTable",
    "build_output_row",
    "build_output",
]

OUTPUT_HEADERS: tuple[str, ...] = (
    "序号",
    "配送方法",
    "送り状種類",
    "伝票番号",
    "送料",
    "電話番号",
    "郵便番号",
    "住所",
    "氏名",
    "お届け希望日",
    "時間帯指定",
    "出荷予定日",
    "ご依頼主電話番号",
    "ご依頼主郵便番号",
    "ご依頼主住所1",
    "ご依頼主名",
    "品名",
    "ゆうパケット専用サイズ欄",
    "注意写真",
    "代引金額",
    "梱包資材費",
    "記事",
)

# ヘッダ行の前に置く空行数 (倉庫側テンプレートは4行目がヘッダ)
LEADING_BLANK_ROWS = 3


@dataclass(frozen=True)
class OutputTable:
    rows: list[list[Any]]
    logs: list[LogEntry]


def build_output_row(sequence: int, group: ShipmentGroup, config: ManifestConfig) -> list[Any]:
    """Build one 22-column manifest row.

    Args:
        sequence: 1-based row number (序号)
        group: Shipment group for one receiver
        config: Supplies sender block and fixed column values

    Returns:
        Cell values in OUTPUT_HEADERS order; products and order ids are
        newline-joined
    """
    fixed = config.fixed_values
    sender = config.sender
    receiver = group.receiver
    return [
        sequence,  # 序号
        fixed.delivery_method,  # 配送方法
        fixed.label_type,  # 送り状種類
        "",  # 伝票番号
        "",  # 送料
        receiver.phone,
        receiver.zip,
        receiver.address,
        receiver.name,
        "",  # お届け希望日
        "",  # 時間帯指定
        "",  # 出荷予定日
        "",  # ご依頼主電話番号
        sender.zip,
        sender.address,
        sender.name,
        "\n".join(group.products),  # 品名
        fixed.packet_size,
        "",  # 注意写真
        fixed.service_fee,
        fixed.packing_fee,
        "\n".join(group.order_ids),  # 記事
    ]


def build_output(
    groups: Sequence[ShipmentGroup],
    valid_lines: int,
    config: ManifestConfig | None = None,
) -> OutputTable:
    """Build manifest rows (sequence from 1, group insertion order) and run logs.

    Raises:
        NoValidOrdersError: ``groups`` is empty
    """
    if not groups:
        raise NoValidOrdersError("No valid orders found to export. Please check the file format.")
    config = config or ManifestConfig()

    rows: list[list[Any]] = []
    logs: list[LogEntry] = []
    for sequence, group in enumerate(groups, start=1):
        if group.is_merged:
            ids = group.order_ids.as_list()
            logs.append(
                LogEntry.merge(
                    f"MERGED: {group.receiver.name} has {len(ids)} orders combined. "
                    f"IDs: {', '.join(ids)}"
                )
            )
        rows.append(build_output_row(sequence, group, config))

    total_groups = len(rows)
    if valid_lines > total_groups:
        logs.append(
            LogEntry.warning(
                f"ATTENTION: {valid_lines - total_groups} orders were merged into existing shipments."
            )
        )
    else:
        logs.append(LogEntry.info(f"{valid_lines} orders processed. No merges required."))
    return OutputTable(rows=rows, logs=logs)
