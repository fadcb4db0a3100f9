"""Order composition modal screen."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from rms.constant import MAX_VISIBLE_ORDER_LINES
from rms.forms import FormError, parse_quantity
from rms.models import Customer, MenuItem, Order, OrderItem
from rms.rendering import customer_label, format_order_lines, menu_item_label, window_bounds


@dataclass(frozen=True)
class OrderDraft:
    """Customer and lines chosen in the modal, ready for the order manager."""

    customer_id: int
    customer_name: str
    items: list[OrderItem]


class OrderModal(ModalScreen[OrderDraft | None]):
    """Pick a customer and compose order lines from the menu."""

    CSS = """
    OrderModal {
        align: center middle;
        background: $background 60%;
    }

    #order-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #order-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #order-pickers {
        color: white;
        margin-bottom: 1;
    }

    #order-lines {
        border: tall $surface;
        padding: 0 1;
        margin-bottom: 1;
        color: white;
    }

    #order-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #order-help {
        color: #dddddd;
    }
    """

    FOCUS_CUSTOMER = "customer"
    FOCUS_MENU_ITEM = "menu_item"
    FOCUS_QUANTITY = "quantity"
    FOCUS_LINES = "lines"
    FOCUS_ORDER = (FOCUS_CUSTOMER, FOCUS_MENU_ITEM, FOCUS_QUANTITY, FOCUS_LINES)

    focus_name = reactive(FOCUS_CUSTOMER)

    def __init__(self, customers: list[Customer], menu_items: list[MenuItem], order: Order | None = None) -> None:
        super().__init__()
        self.customers = list(customers)
        self.menu_items = list(menu_items)
        self.order = order
        self.draft_lines: list[OrderItem] = list(order.items) if order is not None else []
        self.customer_index: int | None = 0 if self.customers else None
        if order is not None:
            self.customer_index = self._customer_index_for(order)
        self.menu_index = 0
        self.quantity_text = "1"
        # The default quantity is replaced by the first digit typed.
        self.quantity_is_default = True
        self.line_index: int | None = None
        self.error = ""

    def _customer_index_for(self, order: Order) -> int:
        for idx, customer in enumerate(self.customers):
            if customer.id == order.customer_id:
                return idx
        # Customer was deleted since the order was placed; keep the recorded name.
        self.customers.insert(0, Customer(id=order.customer_id, name=order.customer_name))
        return 0

    def compose(self) -> ComposeResult:
        title = "New Order" if self.order is None else f"Edit Order #{self.order.id}"
        with Container(id="order-dialog"):
            yield Static(title, id="order-title")
            yield Static(id="order-pickers")
            yield Static(id="order-lines")
            yield Static(id="order-error")
            yield Static(
                "Tab next field. ←/→ choose. Enter/+ add line. Backspace/x remove line. "
                "Ctrl+S save. Esc cancel.",
                id="order-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()

        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            return

        if event.key == "ctrl+s":
            self._confirm()
            return

        if event.key in {"tab", "shift+tab"}:
            delta = 1 if event.key == "tab" else -1
            idx = self.FOCUS_ORDER.index(self.focus_name)
            self.focus_name = self.FOCUS_ORDER[(idx + delta) % len(self.FOCUS_ORDER)]
            self._refresh_content()
            return

        if event.key in {"left", "right"}:
            self._cycle_choice(1 if event.key == "right" else -1)
            return

        if event.key in {"up", "down"} and self.focus_name == self.FOCUS_LINES:
            self._move_line(1 if event.key == "down" else -1)
            return

        if event.key == "enter" or event.character == "+":
            if self.focus_name in {self.FOCUS_MENU_ITEM, self.FOCUS_QUANTITY}:
                self._add_line()
            return

        if event.key == "backspace":
            if self.focus_name == self.FOCUS_QUANTITY:
                self.quantity_text = self.quantity_text[:-1]
                self.quantity_is_default = False
                self.error = ""
                self._refresh_content()
            elif self.focus_name == self.FOCUS_LINES:
                self._remove_line()
            return

        if event.character == "x" and self.focus_name == self.FOCUS_LINES:
            self._remove_line()
            return

        digit = event.character if event.character and len(event.character) == 1 else ""
        if self.focus_name == self.FOCUS_QUANTITY and digit and digit in "0123456789":
            if self.quantity_is_default:
                self.quantity_text = digit
                self.quantity_is_default = False
            elif len(self.quantity_text) < 3:
                self.quantity_text += digit
            self.error = ""
            self._refresh_content()

    def _cycle_choice(self, delta: int) -> None:
        if self.focus_name == self.FOCUS_CUSTOMER and self.customers:
            current = self.customer_index if self.customer_index is not None else -1
            self.customer_index = (current + delta) % len(self.customers)
        elif self.focus_name == self.FOCUS_MENU_ITEM and self.menu_items:
            self.menu_index = (self.menu_index + delta) % len(self.menu_items)
        else:
            return
        self.error = ""
        self._refresh_content()

    def _move_line(self, delta: int) -> None:
        if not self.draft_lines:
            return
        if self.line_index is None:
            self.line_index = 0 if delta > 0 else len(self.draft_lines) - 1
        else:
            self.line_index = (self.line_index + delta) % len(self.draft_lines)
        self._refresh_content()

    def _add_line(self) -> None:
        if not self.menu_items:
            self.error = "Add menu items first."
            self._refresh_content()
            return
        try:
            quantity = parse_quantity(self.quantity_text)
        except FormError as exc:
            self.error = str(exc)
            self._refresh_content()
            return

        item = self.menu_items[self.menu_index]
        self.draft_lines.append(
            OrderItem(menu_item_id=item.id, menu_item_name=item.name, unit_price=item.price, quantity=quantity)
        )
        self.line_index = len(self.draft_lines) - 1
        self.quantity_text = "1"
        self.quantity_is_default = True
        self.error = ""
        self._refresh_content()

    def _remove_line(self) -> None:
        if self.line_index is None or not (0 <= self.line_index < len(self.draft_lines)):
            return
        del self.draft_lines[self.line_index]
        self.line_index = min(self.line_index, len(self.draft_lines) - 1) if self.draft_lines else None
        self._refresh_content()

    def _confirm(self) -> None:
        if self.customer_index is None:
            self.error = "Please add/select a customer."
            self._refresh_content()
            return
        if not self.draft_lines:
            self.error = "Add at least one item."
            self._refresh_content()
            return

        customer = self.customers[self.customer_index]
        self.dismiss(OrderDraft(customer_id=customer.id, customer_name=customer.name, items=list(self.draft_lines)))

    def _picker_line(self, content: Text, focus: str, label: str, value: str) -> None:
        active = self.focus_name == focus
        pointer = "➤ " if active else "  "
        content.append(f"{pointer}{label}: ", style="bold" if active else None)
        content.append(value)

    def _refresh_content(self) -> None:
        customer = "(no customers)" if self.customer_index is None else customer_label(self.customers[self.customer_index])
        menu_item = menu_item_label(self.menu_items[self.menu_index]) if self.menu_items else "(no menu items)"

        pickers = Text()
        self._picker_line(pickers, self.FOCUS_CUSTOMER, "Customer", f"◀ {customer} ▶")
        pickers.append("\n")
        self._picker_line(pickers, self.FOCUS_MENU_ITEM, "Menu Item", f"◀ {menu_item} ▶")
        pickers.append("\n")
        self._picker_line(pickers, self.FOCUS_QUANTITY, "Qty", self.quantity_text)
        if self.focus_name == self.FOCUS_QUANTITY:
            pickers.append("|", style="bold")

        selected = self.line_index if self.focus_name == self.FOCUS_LINES else None
        lines = Text()
        lines.append("Items" + (" (selected)" if self.focus_name == self.FOCUS_LINES else ""), style="bold")
        lines.append("\n")
        window = window_bounds(len(self.draft_lines), MAX_VISIBLE_ORDER_LINES, self.line_index)
        lines.append_text(format_order_lines(self.draft_lines, selected=selected, window=window))

        self.query_one("#order-pickers", Static).update(pickers)
        self.query_one("#order-lines", Static).update(lines)
        self.query_one("#order-error", Static).update(self.error or "")
