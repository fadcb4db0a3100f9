"""Shared pytest fixtures for the restaurant management tests."""

from datetime import datetime, timezone

import pytest

from rms.managers import CustomerManager, MenuItemManager, OrderManager
from rms.models import Customer, MenuItem, Order, OrderItem
from rms.persistence import SnapshotStore


@pytest.fixture
def customers() -> CustomerManager:
    return CustomerManager()


@pytest.fixture
def menu_items() -> MenuItemManager:
    return MenuItemManager()


@pytest.fixture
def orders() -> OrderManager:
    return OrderManager()


@pytest.fixture
def store(tmp_path) -> SnapshotStore:
    """A snapshot store writing into a per-test temporary directory."""
    return SnapshotStore(tmp_path / "data" / "rms_data.db")


@pytest.fixture
def sample_collections() -> tuple[list[Customer], list[MenuItem], list[Order]]:
    """Collections with non-contiguous ids and multi-line orders."""
    customer_list = [
        Customer(id=1, name="Ana", phone="555-1"),
        Customer(id=4, name="Bruno", phone=""),
    ]
    menu_list = [
        MenuItem(id=1, name="Pizza", price=9.5),
        MenuItem(id=2, name="Soda", price=1.25),
        MenuItem(id=7, name="Salad", price=6.0),
    ]
    order_list = [
        Order(
            id=3,
            customer_id=1,
            customer_name="Ana",
            created_at=datetime(2024, 5, 1, 18, 30, 15, 123456, tzinfo=timezone.utc),
            items=[
                OrderItem(menu_item_id=2, menu_item_name="Soda", unit_price=1.25, quantity=3),
                OrderItem(menu_item_id=1, menu_item_name="Pizza", unit_price=9.5, quantity=2),
            ],
        ),
        Order(
            id=5,
            customer_id=9,
            customer_name="Deleted Customer",
            created_at=datetime(2024, 5, 2, 12, 0, tzinfo=timezone.utc),
            items=[OrderItem(menu_item_id=7, menu_item_name="Salad", unit_price=6.0, quantity=1)],
        ),
    ]
    return customer_list, menu_list, order_list
