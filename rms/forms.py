"""Validation of form input before it reaches the managers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from rms.constant import MAX_QUANTITY, VIEW_CUSTOMERS, VIEW_MENU_ITEMS


@dataclass(frozen=True)
class CustomerFields:
    name: str
    phone: str


@dataclass(frozen=True)
class MenuItemFields:
    name: str
    price: float


class FormError(ValueError):
    """User-facing validation message."""


def parse_customer_form(values: dict[str, str]) -> CustomerFields:
    name = values.get("name", "").strip()
    if not name:
        raise FormError("Name required")
    return CustomerFields(name=name, phone=values.get("phone", "").strip())


def parse_menu_item_form(values: dict[str, str]) -> MenuItemFields:
    name = values.get("name", "").strip()
    if not name:
        raise FormError("Name required")
    try:
        price = float(values.get("price", "").strip())
    except ValueError:
        raise FormError("Price must be a number") from None
    if not math.isfinite(price):
        raise FormError("Price must be a number")
    return MenuItemFields(name=name, price=price)


def parse_record_form(view: str, values: dict[str, str]) -> CustomerFields | MenuItemFields:
    """Dispatch to the parser for the given view."""
    if view == VIEW_CUSTOMERS:
        return parse_customer_form(values)
    if view == VIEW_MENU_ITEMS:
        return parse_menu_item_form(values)
    raise KeyError(view)


def parse_quantity(text: str) -> int:
    """Parse an order line quantity in the range 1..MAX_QUANTITY."""
    raw = text.strip()
    # isdigit() alone also accepts superscripts such as "²", which int() rejects.
    if not (raw.isascii() and raw.isdigit()):
        raise FormError("Quantity must be a whole number")
    quantity = int(raw)
    if not (1 <= quantity <= MAX_QUANTITY):
        raise FormError(f"Quantity must be between 1 and {MAX_QUANTITY}")
    return quantity
