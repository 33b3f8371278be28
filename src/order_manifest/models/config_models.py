from __future__ import annotations

from dataclasses import dataclass, field

from .column_map import ColumnId

"""Config dataclasses for the order manifest builder.

Defaults reproduce the warehouse sheet the manifest is uploaded to (Japan Post
Yu-Packet via the AIRUPA logistics center); every value can be overridden from
config/manifest.yml (see order_manifest.config.loader).
"""


@dataclass(frozen=True)
class SenderConfig:
    """ご依頼主 (sender) block written on every manifest row."""
    name: str = "AIRUPA物流センター"
    zip: str = "455-0065"
    address: str = "名古屋市港区本宮新町86"


@dataclass(frozen=True)
class FixedValues:
    """Constant codes written on every manifest row."""
    delivery_method: int = 9  # 配送方法
    label_type: int = 1800800001  # 送り状種類
    packet_size: int = 20  # ゆうパケット専用サイズ欄
    service_fee: int = 0  # 代引金額
    packing_fee: int = 0  # 梱包資材費


@dataclass(frozen=True)
class ManifestConfig:
    """Root configuration for a manifest run."""
    source_directory: str = "./data"  # 入力 .xlsx 探索ディレクトリ
    output_directory: str = "./output"  # マニフェスト出力先
    log_directory: str | None = None  # 指定時のみ JSON Lines の処理ログを書き出す
    filename_prefix: str = "邮局小包-Capypie"
    filename_extension: str = ".xlsx"
    sender: SenderConfig = field(default_factory=SenderConfig)
    fixed_values: FixedValues = field(default_factory=FixedValues)
    # 商品名/数量はレイアウトに関係なく固定列から読む
    product_column: ColumnId = "G"
    quantity_column: ColumnId = "J"
    header_scan_limit: int = 20
    min_phone_digits: int = 8
