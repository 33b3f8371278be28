"""Domain models for the order manifest builder.

This package contains the domain model classes shared by the services,
the workbook reader/writer and the CLI.
"""

from .column_map import ColumnId, ColumnMap, Layout
from .config_models import FixedValues, ManifestConfig, SenderConfig
from .log_entry import LogEntry, LogType
from .order_record import OrderRecord, RawRow
from .processing_result import ManifestResult, ManifestStats, RunStatus
from .shipment_group import OrderedIdSet, Receiver, ShipmentGroup

__all__ = [
    # Configuration models
    "FixedValues",
    "ManifestConfig",
    "SenderConfig",
    # Input / mapping models
    "ColumnId",
    "ColumnMap",
    "Layout",
    "RawRow",
    "OrderRecord",
    # Aggregation / output models
    "OrderedIdSet",
    "Receiver",
    "ShipmentGroup",
    "LogEntry",
    "LogType",
    "ManifestResult",
    "ManifestStats",
    "RunStatus",
]
