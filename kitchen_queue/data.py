"""Static menu catalog."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Iterator, Mapping

from kitchen_queue.constant import MENU_ITEMS_BY_CODE
from kitchen_queue.models import Category, MenuItem


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup of menu items by item code."""

    items_by_id: Mapping[int, MenuItem]

    def item(self, item_id: int) -> MenuItem:
        return self.items_by_id[item_id]

    def price_of(self, item_id: int) -> Decimal:
        return self.items_by_id[item_id].price

    def name_of(self, item_id: int) -> str:
        return self.items_by_id[item_id].name

    def items_in(self, category: Category) -> list[MenuItem]:
        """Items of one menu section, in code order."""
        return [item for item in self if item.category == category]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items_by_id

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items_by_id[item_id] for item_id in sorted(self.items_by_id))

    def __len__(self) -> int:
        return len(self.items_by_id)


def load_catalog(raw: Mapping[int, Mapping[str, str]] = MENU_ITEMS_BY_CODE) -> Catalog:
    """Build the catalog once from the editable menu table."""
    items = {
        int(code): MenuItem(
            item_id=int(code),
            name=str(meta["name"]),
            price=Decimal(str(meta["price"])),
            category=Category(meta["category"]),
        )
        for code, meta in raw.items()
    }
    return Catalog(items_by_id=MappingProxyType(items))
