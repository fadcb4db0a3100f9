"""Editable static view and form configuration."""

from __future__ import annotations

VIEW_CUSTOMERS = "customers"
VIEW_MENU_ITEMS = "menu_items"
VIEW_ORDERS = "orders"

VIEW_BY_KEY: dict[str, str] = {
    "c": VIEW_CUSTOMERS,
    "m": VIEW_MENU_ITEMS,
    "o": VIEW_ORDERS,
}

VIEW_TITLES: dict[str, str] = {
    VIEW_CUSTOMERS: "Customers",
    VIEW_MENU_ITEMS: "Menu Items",
    VIEW_ORDERS: "Orders",
}

# Singular nouns used in prompts and status messages.
VIEW_NOUNS: dict[str, str] = {
    VIEW_CUSTOMERS: "customer",
    VIEW_MENU_ITEMS: "menu item",
    VIEW_ORDERS: "order",
}

VIEW_COLUMNS: dict[str, list[str]] = {
    VIEW_CUSTOMERS: ["ID", "Name", "Phone"],
    VIEW_MENU_ITEMS: ["ID", "Name", "Price"],
    VIEW_ORDERS: ["ID", "Customer", "Items", "Total"],
}

# (field key, label) pairs shown in the record form, in tab order.
FORM_FIELDS: dict[str, list[tuple[str, str]]] = {
    VIEW_CUSTOMERS: [("name", "Name"), ("phone", "Phone")],
    VIEW_MENU_ITEMS: [("name", "Name"), ("price", "Price")],
}

MAX_QUANTITY = 999
MAX_FIELD_LENGTH = 80
MAX_VISIBLE_ORDER_LINES = 8
