"""Entry point for the restaurant management Textual app."""

from __future__ import annotations

import sys

from loguru import logger

from rms.config import resolve_log_level, resolve_snapshot_path
from rms.log_setup import setup_logging
from rms.management_app import ManagementApp
from rms.managers import CustomerManager, MenuItemManager, OrderManager
from rms.persistence import SnapshotStore


def build_app(store: SnapshotStore) -> ManagementApp:
    """Create the managers, hydrate them from the store and wire up the app."""
    customers = CustomerManager()
    menu_items = MenuItemManager()
    orders = OrderManager()

    result = store.load_result()
    snapshot = result.snapshot
    customers.load_all(snapshot.customers)
    menu_items.load_all(snapshot.menu_items)
    orders.load_all(snapshot.orders)

    app = ManagementApp(customers, menu_items, orders, store)
    if not result.ok:
        app.system_status = f"Could not read {store.path}, starting empty: {result.error}"
    return app


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application and save once more on exit."""
    args = sys.argv[1:] if argv is None else argv
    setup_logging(resolve_log_level())

    store = SnapshotStore(args[0] if args else resolve_snapshot_path())
    logger.info("Starting with snapshot {}", store.path)
    app = build_app(store)
    try:
        app.run()
    finally:
        if app.persist():
            logger.info("Shut down, snapshot saved to {}", store.path)


if __name__ == "__main__":
    main()
