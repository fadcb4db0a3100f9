"""Main Textual app class."""

from __future__ import annotations

from loguru import logger
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from rms.confirm_modal import ConfirmModal
from rms.constant import (
    VIEW_BY_KEY,
    VIEW_COLUMNS,
    VIEW_CUSTOMERS,
    VIEW_MENU_ITEMS,
    VIEW_NOUNS,
    VIEW_ORDERS,
    VIEW_TITLES,
)
from rms.forms import CustomerFields, MenuItemFields
from rms.managers import CustomerManager, MenuItemManager, OrderManager
from rms.models import Customer, MenuItem, Order
from rms.order_modal import OrderDraft, OrderModal
from rms.persistence import SnapshotStore
from rms.record_form_modal import RecordFormModal
from rms.rendering import (
    customer_label,
    format_money,
    format_order_lines,
    format_table,
    row_cells,
    visible_rows,
    window_bounds,
)

Record = Customer | MenuItem | Order


class ManagementApp(App):
    """A Textual app for managing customers, menu items and orders."""

    TITLE = "Restaurant Management"
    SUB_TITLE = "Customers / Menu Items / Orders"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #list-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #detail-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #records-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #detail {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    active_view = reactive(VIEW_CUSTOMERS)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("enter", "edit_selected", "Edit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        customers: CustomerManager,
        menu_items: MenuItemManager,
        orders: OrderManager,
        store: SnapshotStore,
    ) -> None:
        super().__init__()
        self.customers = customers
        self.menu_items = menu_items
        self.orders = orders
        self.store = store
        self.selected_index: dict[str, int | None] = {VIEW_CUSTOMERS: None, VIEW_MENU_ITEMS: None, VIEW_ORDERS: None}
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="list-pane"):
                yield Static(id="list-title", classes="pane-title")
                yield Static(id="records-list")
            with Vertical(id="detail-pane"):
                yield Static("Details", classes="pane-title")
                yield Static(id="detail")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        if key in VIEW_BY_KEY:
            self.active_view = VIEW_BY_KEY[key]
            self._refresh_all()
            event.stop()
            return

        if key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        elif key == "a":
            self.action_add_record()
        elif key == "e":
            self.action_edit_selected()
        elif key == "d":
            self.action_delete_selected()
        else:
            return
        event.stop()

    # -------------------- persistence --------------------

    def persist(self) -> bool:
        """Write every collection to the snapshot store."""
        ok = self.store.save(self.customers.get_all(), self.menu_items.get_all(), self.orders.get_all())
        if not ok:
            self.system_status = "Save failed, changes are only in memory (see log)"
        return ok

    def _after_mutation(self, message: str) -> None:
        logger.debug(message)
        self.system_status = message
        self.persist()
        self._refresh_all()

    # -------------------- actions --------------------

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        total = len(self._records())
        if not total:
            return

        current = self.selected_index[self.active_view]
        if current is None:
            current = 0 if delta > 0 else total - 1
        else:
            current = (current + delta) % total
        self.selected_index[self.active_view] = current
        self._refresh_all()

    def action_add_record(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.active_view == VIEW_ORDERS:
            self.push_screen(
                OrderModal(self.customers.get_all(), self.menu_items.get_all()),
                self._on_order_added,
            )
            return
        self.push_screen(RecordFormModal(self.active_view), self._on_record_added)

    def action_edit_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        record = self._selected_record()
        if record is None:
            self.system_status = f"Select a {VIEW_NOUNS[self.active_view]}"
            self._refresh_status()
            return

        if isinstance(record, Order):
            self.push_screen(
                OrderModal(self.customers.get_all(), self.menu_items.get_all(), order=record),
                lambda draft: self._on_order_edited(record.id, draft),
            )
        elif isinstance(record, Customer):
            self.push_screen(
                RecordFormModal(self.active_view, {"name": record.name, "phone": record.phone or ""}, record_id=record.id),
                lambda fields: self._on_record_edited(record.id, fields),
            )
        else:
            self.push_screen(
                RecordFormModal(self.active_view, {"name": record.name, "price": str(record.price)}, record_id=record.id),
                lambda fields: self._on_record_edited(record.id, fields),
            )

    def action_delete_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        record = self._selected_record()
        if record is None:
            self.system_status = f"Select a {VIEW_NOUNS[self.active_view]}"
            self._refresh_status()
            return
        view = self.active_view
        self.push_screen(
            ConfirmModal(f"Delete selected {VIEW_NOUNS[view]} #{record.id}?"),
            lambda confirmed: self._on_delete_confirmed(view, record.id, confirmed),
        )

    # -------------------- modal callbacks --------------------

    def _on_record_added(self, fields: CustomerFields | MenuItemFields | None) -> None:
        if fields is None:
            return
        if isinstance(fields, CustomerFields):
            record: Record = self.customers.add(fields.name, fields.phone)
        else:
            record = self.menu_items.add(fields.name, fields.price)
        self.selected_index[self.active_view] = len(self._records()) - 1
        self._after_mutation(f"Added {VIEW_NOUNS[self.active_view]} #{record.id}")

    def _on_record_edited(self, record_id: int, fields: CustomerFields | MenuItemFields | None) -> None:
        if fields is None:
            return
        if isinstance(fields, CustomerFields):
            updated = self.customers.update(record_id, fields.name, fields.phone)
        else:
            updated = self.menu_items.update(record_id, fields.name, fields.price)
        if not updated:
            self.system_status = f"{VIEW_NOUNS[self.active_view].title()} #{record_id} no longer exists"
            self._refresh_status()
            return
        self._after_mutation(f"Updated {VIEW_NOUNS[self.active_view]} #{record_id}")

    def _on_order_added(self, draft: OrderDraft | None) -> None:
        if draft is None:
            return
        order = self.orders.add(draft.customer_id, draft.customer_name, draft.items)
        self.selected_index[VIEW_ORDERS] = len(self.orders) - 1
        self._after_mutation(f"Order #{order.id} saved, total {format_money(order.total)}")

    def _on_order_edited(self, order_id: int, draft: OrderDraft | None) -> None:
        if draft is None:
            return
        if not self.orders.update(order_id, draft.customer_id, draft.customer_name, draft.items):
            self.system_status = f"Order #{order_id} no longer exists"
            self._refresh_status()
            return
        self._after_mutation(f"Order #{order_id} updated")

    def _on_delete_confirmed(self, view: str, record_id: int, confirmed: bool | None) -> None:
        if not confirmed:
            return
        if not self._manager_for(view).delete(record_id):
            return
        self._after_mutation(f"Deleted {VIEW_NOUNS[view]} #{record_id}")

    # -------------------- helpers --------------------

    def _manager_for(self, view: str) -> CustomerManager | MenuItemManager | OrderManager:
        if view == VIEW_CUSTOMERS:
            return self.customers
        if view == VIEW_MENU_ITEMS:
            return self.menu_items
        return self.orders

    def _records(self) -> list[Record]:
        return self._manager_for(self.active_view).get_all()

    def _selected_record(self) -> Record | None:
        records = self._records()
        idx = self.selected_index[self.active_view]
        if idx is None or not (0 <= idx < len(records)):
            return None
        return records[idx]

    def _refresh_all(self) -> None:
        self._refresh_list()
        self._refresh_detail()
        self._refresh_status()

    def _refresh_list(self) -> None:
        try:
            title_widget = self.query_one("#list-title", Static)
            list_widget = self.query_one("#records-list", Static)
        except NoMatches:
            return
        title_widget.update(VIEW_TITLES[self.active_view])

        records = self._records()
        if not records:
            self.selected_index[self.active_view] = None
            list_widget.update(f"(no {VIEW_TITLES[self.active_view].lower()} yet)")
            return

        selected = self.selected_index[self.active_view]
        if selected is not None and selected >= len(records):
            selected = self.selected_index[self.active_view] = len(records) - 1

        # One row is taken by the column header.
        rows_available = visible_rows(list_widget.size.height, reserved=1)
        start, end = window_bounds(len(records), rows_available, selected)
        rows = [row_cells(self.active_view, record) for record in records[start:end]]
        table = format_table(
            VIEW_COLUMNS[self.active_view],
            rows,
            selected=None if selected is None else selected - start,
        )
        if end < len(records):
            table.append("\n⋮", style="dim")
        list_widget.update(table)

    def _refresh_detail(self) -> None:
        try:
            detail_widget = self.query_one("#detail", Static)
        except NoMatches:
            return
        record = self._selected_record()
        if record is None:
            detail_widget.update("")
            return

        text = Text()
        if isinstance(record, Order):
            text.append(f"Order #{record.id}\n", style="bold")
            text.append(f"Customer: {record.customer_name} (#{record.customer_id})\n")
            text.append(f"Created: {record.created_at.astimezone():%Y-%m-%d %H:%M}\n\n")
            text.append_text(format_order_lines(record.items))
        elif isinstance(record, Customer):
            text.append(f"Customer #{record.id}\n", style="bold")
            text.append(customer_label(record))
        else:
            text.append(f"Menu Item #{record.id}\n", style="bold")
            text.append(f"{record.name}\nPrice: {format_money(record.price)}")
        detail_widget.update(text)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        bar.update(
            "C customers  M menu items  O orders  |  J/K move  A add  E edit  D delete  Ctrl+Q quit\n"
            f"{status}"
        )
