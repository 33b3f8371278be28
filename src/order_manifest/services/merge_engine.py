from __future__ import annotations

from ..models.order_record import OrderRecord
from ..models.shipment_group import OrderedIdSet, Receiver, ShipmentGroup
from .normalizer import calculate_product

"""Shipment merging.

Rows merge iff phone, zip, address and name are exactly equal after
normalization. Groups keep first-insertion order (dict ordering) which is
the output row order.
"""

__all__ = [
    "MergeEngine",
]


class MergeEngine:
    """Accumulates validated order lines into shipment groups.

    One instance per run; it is never reused across input files.
    """

    def __init__(self) -> None:
        self._groups: dict[str, ShipmentGroup] = {}
        self.record_count = 0

    def add(self, record: OrderRecord) -> ShipmentGroup:
        """Fold ``record`` into its group (creating the group on first sight).

        Args:
            record: Validated order line

        Returns:
            The group the record landed in
        """
        product = calculate_product(record.product_name, record.quantity)
        key = record.merge_key
        group = self._groups.get(key)
        if group is None:
            group = ShipmentGroup(
                merge_key=key,
                receiver=Receiver(
                    name=record.name,
                    phone=record.phone,
                    zip=record.zip,
                    address=record.address,
                ),
                order_ids=OrderedIdSet([record.order_id]),
                products=[product],
            )
            self._groups[key] = group
        else:
            group.add_line(record.order_id, product)
        self.record_count += 1
        return group

    @property
    def groups(self) -> list[ShipmentGroup]:
        return list(self._groups.values())

    def get(self, merge_key: str) -> ShipmentGroup | None:
        return self._groups.get(merge_key)

    def __len__(self) -> int:
        return len(self._groups)
