"""Rendering helpers for list rows and order lines."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from rms.constant import VIEW_CUSTOMERS, VIEW_MENU_ITEMS, VIEW_ORDERS
from rms.models import Customer, MenuItem, Order, OrderItem, items_total


def format_money(value: float) -> str:
    return f"{value:.2f}"


def customer_label(customer: Customer) -> str:
    """Name with the phone number in parentheses when present."""
    if customer.phone:
        return f"{customer.name} ({customer.phone})"
    return customer.name


def menu_item_label(item: MenuItem) -> str:
    return f"{item.name} - {format_money(item.price)}"


def row_cells(view: str, record: Customer | MenuItem | Order) -> list[str]:
    """Cells for one list row, matching VIEW_COLUMNS for the view."""
    if view == VIEW_CUSTOMERS:
        return [str(record.id), record.name, record.phone or ""]
    if view == VIEW_MENU_ITEMS:
        return [str(record.id), record.name, format_money(record.price)]
    if view == VIEW_ORDERS:
        return [str(record.id), record.customer_name, str(len(record.items)), format_money(record.total)]
    raise KeyError(view)


def format_table(headers: list[str], rows: list[list[str]], selected: int | None = None) -> Text:
    """Plain column-aligned table with a pointer on the selected row."""
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    def fmt_row(cells: list[str]) -> str:
        return "  ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(cells)).rstrip()

    text = Text()
    text.append(f"  {fmt_row(headers)}", style="bold")
    for idx, row in enumerate(rows):
        text.append("\n")
        pointer = "➤ " if idx == selected else "  "
        text.append(f"{pointer}{fmt_row(row)}", style="reverse" if idx == selected else None)
    return text


def visible_rows(height: int, reserved: int = 0) -> int:
    """Rows available in a widget of the given height; 8 before layout runs."""
    rows = height - reserved
    if rows <= 0:
        return 8
    return max(1, rows)


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    """Slice of ``total`` rows to show so that ``selected`` stays centred."""
    if total <= 0:
        return (0, 0)

    rows = max(1, rows)
    if total <= rows:
        return (0, total)

    if selected is None:
        start = 0
    else:
        half = rows // 2
        start = selected - half
        start = max(0, start)
        start = min(start, total - rows)

    return (start, start + rows)


def format_order_lines(
    items: Sequence[OrderItem],
    selected: int | None = None,
    window: tuple[int, int] | None = None,
) -> Text:
    """Render order lines with line totals followed by the order total.

    ``window`` limits the rendered lines to ``items[start:end]``; the total
    always covers every line.
    """
    start, end = window if window is not None else (0, len(items))
    text = Text()
    if not items:
        text.append("(no items yet)", style="dim")
    if start > 0:
        text.append("⋮\n", style="dim")
    for idx in range(start, end):
        item = items[idx]
        if idx > start:
            text.append("\n")
        pointer = "➤ " if idx == selected else "  "
        text.append(
            f"{pointer}{item.quantity} x {item.menu_item_name} @ {format_money(item.unit_price)}"
            f" = {format_money(item.line_total)}"
        )
    if end < len(items):
        text.append("\n⋮", style="dim")
    text.append("\n\n")
    text.append(f"Total: {format_money(items_total(items))}", style="bold")
    return text
