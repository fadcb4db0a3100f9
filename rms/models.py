"""Domain models for the restaurant management system."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable


@dataclass
class Customer:
    """A restaurant customer."""

    id: int
    name: str
    phone: str = ""


@dataclass
class MenuItem:
    """A priced menu item."""

    id: int
    name: str
    price: float


@dataclass(frozen=True)
class OrderItem:
    """An order line with menu item fields copied at the time it was added."""

    menu_item_id: int
    menu_item_name: str
    unit_price: float
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


def items_total(items: Iterable[OrderItem]) -> float:
    """Sum line totals for a sequence of order lines."""
    return sum((item.line_total for item in items), 0.0)


@dataclass
class Order:
    """A customer order. ``created_at`` is stamped once by the order manager."""

    id: int
    customer_id: int
    customer_name: str
    created_at: datetime
    items: list[OrderItem] = field(default_factory=list)

    @property
    def total(self) -> float:
        return items_total(self.items)

    def copy(self) -> Order:
        return replace(self, items=list(self.items))


@dataclass
class Snapshot:
    """Complete persisted state of customers, menu items and orders."""

    customers: list[Customer] = field(default_factory=list)
    menu_items: list[MenuItem] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.customers or self.menu_items or self.orders)
