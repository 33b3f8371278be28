from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

"""ShipmentGroup domain model.

A ShipmentGroup is the unit written as one manifest row: every validated order
line sharing the same phone/zip/address/name identity is folded into it.
Groups only grow; nothing is ever removed from one during a run.
"""

__all__ = [
    "OrderedIdSet",
    "Receiver",
    "ShipmentGroup",
]


class OrderedIdSet:
    """Set of order ids that remembers insertion order.

    Backed by a list (order) plus a set (membership) so output ordering is
    deterministic regardless of hashing.
    """

    def __init__(self, items: Iterable[str] | None = None) -> None:
        self._items: list[str] = []
        self._seen: set[str] = set()
        for item in items or ():
            self.add(item)

    def add(self, item: str) -> bool:
        """Add ``item``; return False when it was already present."""
        if item in self._seen:
            return False
        self._seen.add(item)
        self._items.append(item)
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_list(self) -> list[str]:
        return list(self._items)

    def __repr__(self) -> str:  # pragma: no cover (debug aid)
        return f"OrderedIdSet({self._items!r})"


@dataclass(frozen=True)
class Receiver:
    name: str
    phone: str
    zip: str
    address: str


@dataclass
class ShipmentGroup:
    """Aggregated shipment: one receiver, many order ids and product lines."""
    merge_key: str
    receiver: Receiver
    order_ids: OrderedIdSet = field(default_factory=OrderedIdSet)
    products: list[str] = field(default_factory=list)  # 行出現順

    def add_line(self, order_id: str, product: str) -> None:
        self.order_ids.add(order_id)
        self.products.append(product)

    @property
    def is_merged(self) -> bool:
        return len(self.order_ids) > 1
