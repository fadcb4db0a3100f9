"""In-memory entity managers with id allocation and CRUD operations."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Generic, Iterable, TypeVar

from rms.models import Customer, MenuItem, Order, OrderItem

T = TypeVar("T", Customer, MenuItem, Order)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _EntityManager(Generic[T]):
    """Shared collection handling. Entities leave the manager only as copies."""

    def __init__(self) -> None:
        self._entities: list[T] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._entities)

    def _copy(self, entity: T) -> T:
        return replace(entity)

    def _allocate_id(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def _find(self, entity_id: int) -> T | None:
        for entity in self._entities:
            if entity.id == entity_id:
                return entity
        return None

    def get_all(self) -> list[T]:
        """Return copies of all entities in insertion order."""
        return [self._copy(entity) for entity in self._entities]

    def find_by_id(self, entity_id: int) -> T | None:
        entity = self._find(entity_id)
        if entity is None:
            return None
        return self._copy(entity)

    def delete(self, entity_id: int) -> bool:
        """Remove the first entity with a matching id."""
        for idx, entity in enumerate(self._entities):
            if entity.id == entity_id:
                del self._entities[idx]
                return True
        return False

    def load_all(self, entities: Iterable[T]) -> None:
        """Replace the whole collection and recompute the next id."""
        self._entities = [self._copy(entity) for entity in entities]
        self._next_id = max((entity.id for entity in self._entities), default=0) + 1


class CustomerManager(_EntityManager[Customer]):
    def add(self, name: str, phone: str = "") -> Customer:
        customer = Customer(id=self._allocate_id(), name=name, phone=phone)
        self._entities.append(customer)
        return self._copy(customer)

    def update(self, customer_id: int, name: str, phone: str = "") -> bool:
        customer = self._find(customer_id)
        if customer is None:
            return False
        customer.name = name
        customer.phone = phone
        return True


class MenuItemManager(_EntityManager[MenuItem]):
    def add(self, name: str, price: float) -> MenuItem:
        item = MenuItem(id=self._allocate_id(), name=name, price=price)
        self._entities.append(item)
        return self._copy(item)

    def update(self, item_id: int, name: str, price: float) -> bool:
        item = self._find(item_id)
        if item is None:
            return False
        item.name = name
        item.price = price
        return True


class OrderManager(_EntityManager[Order]):
    """Orders keep their own copy of the line list passed in."""

    def _copy(self, entity: Order) -> Order:
        return entity.copy()

    def add(self, customer_id: int, customer_name: str, items: Iterable[OrderItem]) -> Order:
        order = Order(
            id=self._allocate_id(),
            customer_id=customer_id,
            customer_name=customer_name,
            created_at=_utc_now(),
            items=list(items),
        )
        self._entities.append(order)
        return self._copy(order)

    def update(self, order_id: int, customer_id: int, customer_name: str, items: Iterable[OrderItem]) -> bool:
        order = self._find(order_id)
        if order is None:
            return False
        order.customer_id = customer_id
        order.customer_name = customer_name
        order.items = list(items)
        return True
