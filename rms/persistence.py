"""SQLite snapshot persistence for customers, menu items and orders.

The whole application state is written as one unit: a fresh database is built
next to the target file and then moved over it, so every save fully replaces
the previous snapshot.
"""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing, suppress
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable

from loguru import logger

from rms.config import SNAPSHOT_FORMAT, SNAPSHOT_PATH
from rms.models import Customer, MenuItem, Order, OrderItem, Snapshot

_SCHEMA = """
CREATE TABLE customers (
    position INTEGER PRIMARY KEY,
    id INTEGER NOT NULL,
    name TEXT NOT NULL,
    phone TEXT
);

CREATE TABLE menu_items (
    position INTEGER PRIMARY KEY,
    id INTEGER NOT NULL,
    name TEXT NOT NULL,
    price REAL NOT NULL
);

CREATE TABLE orders (
    position INTEGER PRIMARY KEY,
    id INTEGER NOT NULL,
    customer_id INTEGER NOT NULL,
    customer_name TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE order_items (
    order_position INTEGER NOT NULL,
    line_index INTEGER NOT NULL,
    menu_item_id INTEGER NOT NULL,
    menu_item_name TEXT NOT NULL,
    unit_price REAL NOT NULL,
    quantity INTEGER NOT NULL,
    PRIMARY KEY (order_position, line_index),
    FOREIGN KEY(order_position) REFERENCES orders(position)
);
"""


class SnapshotFormatError(ValueError):
    """Raised when a snapshot file was written with another format number."""


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading a snapshot. ``snapshot`` is always usable."""

    snapshot: Snapshot
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _connect(db_file: Path, read_only: bool = False) -> sqlite3.Connection:
    if read_only:
        return sqlite3.connect(f"{db_file.resolve().as_uri()}?mode=ro", uri=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _read_snapshot(db_file: Path) -> Snapshot:
    with closing(_connect(db_file, read_only=True)) as conn:
        (version,) = conn.execute("PRAGMA user_version").fetchone()
        if version != SNAPSHOT_FORMAT:
            raise SnapshotFormatError(f"snapshot format {version}, expected {SNAPSHOT_FORMAT}")

        customers = [
            Customer(id=row[0], name=row[1], phone=row[2])
            for row in conn.execute("SELECT id, name, phone FROM customers ORDER BY position")
        ]
        menu_items = [
            MenuItem(id=row[0], name=row[1], price=row[2])
            for row in conn.execute("SELECT id, name, price FROM menu_items ORDER BY position")
        ]

        items_by_order: dict[int, list[OrderItem]] = {}
        for order_position, menu_item_id, menu_item_name, unit_price, quantity in conn.execute(
            """
            SELECT order_position, menu_item_id, menu_item_name, unit_price, quantity
            FROM order_items
            ORDER BY order_position, line_index
            """
        ):
            items_by_order.setdefault(order_position, []).append(
                OrderItem(
                    menu_item_id=menu_item_id,
                    menu_item_name=menu_item_name,
                    unit_price=unit_price,
                    quantity=quantity,
                )
            )

        orders = [
            Order(
                id=order_id,
                customer_id=customer_id,
                customer_name=customer_name,
                created_at=datetime.fromisoformat(created_at),
                items=items_by_order.get(position, []),
            )
            for position, order_id, customer_id, customer_name, created_at in conn.execute(
                "SELECT position, id, customer_id, customer_name, created_at FROM orders ORDER BY position"
            )
        ]

    return Snapshot(customers=customers, menu_items=menu_items, orders=orders)


def _write_snapshot(db_file: Path, snapshot: Snapshot) -> None:
    with closing(_connect(db_file)) as conn:
        conn.executescript(_SCHEMA)
        with conn:
            conn.execute(f"PRAGMA user_version = {int(SNAPSHOT_FORMAT)}")
            conn.executemany(
                "INSERT INTO customers (position, id, name, phone) VALUES (?, ?, ?, ?)",
                [(idx, c.id, c.name, c.phone) for idx, c in enumerate(snapshot.customers)],
            )
            conn.executemany(
                "INSERT INTO menu_items (position, id, name, price) VALUES (?, ?, ?, ?)",
                [(idx, m.id, m.name, m.price) for idx, m in enumerate(snapshot.menu_items)],
            )
            for idx, order in enumerate(snapshot.orders):
                conn.execute(
                    """
                    INSERT INTO orders (position, id, customer_id, customer_name, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (idx, order.id, order.customer_id, order.customer_name, order.created_at.isoformat()),
                )
                conn.executemany(
                    """
                    INSERT INTO order_items
                        (order_position, line_index, menu_item_id, menu_item_name, unit_price, quantity)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (idx, line_index, item.menu_item_id, item.menu_item_name, item.unit_price, item.quantity)
                        for line_index, item in enumerate(order.items)
                    ],
                )


class SnapshotStore:
    """Loads and saves the full application state as one snapshot file."""

    def __init__(self, path: str | Path = SNAPSHOT_PATH) -> None:
        self.path = Path(path)

    @property
    def _tmp_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.tmp")

    def load_result(self) -> LoadResult:
        """Read the snapshot, keeping any failure next to an empty fallback."""
        if not self.path.exists():
            logger.debug("No snapshot at {}, starting empty", self.path)
            return LoadResult(Snapshot())

        try:
            snapshot = _read_snapshot(self.path)
        except (sqlite3.Error, OSError, ValueError) as exc:
            logger.opt(exception=exc).error("Discarding unreadable snapshot {}: {}", self.path, exc)
            return LoadResult(Snapshot(), error=exc)

        logger.debug(
            "Loaded snapshot {} customers={} menu_items={} orders={}",
            self.path,
            len(snapshot.customers),
            len(snapshot.menu_items),
            len(snapshot.orders),
        )
        return LoadResult(snapshot)

    def load(self) -> Snapshot:
        """Return the persisted snapshot, or an empty one if it is missing or unreadable."""
        return self.load_result().snapshot

    def save(
        self,
        customers: Iterable[Customer],
        menu_items: Iterable[MenuItem],
        orders: Iterable[Order],
    ) -> bool:
        """Overwrite the snapshot file with the given collections.

        Returns False if the write failed; the error is logged, not raised.
        Values sqlite cannot bind (lone surrogates, ints beyond 64 bits)
        count as write failures too.
        """
        snapshot = Snapshot(customers=list(customers), menu_items=list(menu_items), orders=list(orders))
        tmp_path = self._tmp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.unlink(missing_ok=True)
            _write_snapshot(tmp_path, snapshot)
            os.replace(tmp_path, self.path)
        except (sqlite3.Error, OSError, ValueError, OverflowError) as exc:
            logger.opt(exception=exc).error("Failed to save snapshot {}: {}", self.path, exc)
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            return False

        logger.debug(
            "Saved snapshot {} customers={} menu_items={} orders={}",
            self.path,
            len(snapshot.customers),
            len(snapshot.menu_items),
            len(snapshot.orders),
        )
        return True
