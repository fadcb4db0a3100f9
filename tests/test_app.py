"""Headless smoke tests for the Textual shell.

No terminal is needed: App.run_test() drives the app with a Pilot.
"""

import asyncio

from loguru import logger

from rms.confirm_modal import ConfirmModal
from rms.constant import VIEW_CUSTOMERS, VIEW_MENU_ITEMS, VIEW_ORDERS
from rms.main import build_app, main
from rms.management_app import ManagementApp
from rms.models import Customer, OrderItem
from rms.order_modal import OrderModal
from rms.persistence import SnapshotStore
from rms.record_form_modal import RecordFormModal


def _run(app, scenario):
    async def runner():
        async with app.run_test() as pilot:
            await pilot.pause()
            await scenario(pilot)

    asyncio.run(runner())


class TestStartup:
    def test_build_app_hydrates_managers(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        assert len(app.customers) == 2
        assert len(app.menu_items) == 3
        assert len(app.orders) == 2
        assert app.system_status == ""

    def test_build_app_reports_unreadable_snapshot(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b"corrupt" * 50)

        app = build_app(store)
        assert len(app.customers) == 0
        assert app.system_status.startswith("Could not read")


class TestViews:
    def test_view_keys_switch_views(self, store):
        app = build_app(store)

        async def scenario(pilot):
            assert app.active_view == VIEW_CUSTOMERS
            await pilot.press("m")
            assert app.active_view == VIEW_MENU_ITEMS
            await pilot.press("o")
            assert app.active_view == VIEW_ORDERS
            await pilot.press("c")
            assert app.active_view == VIEW_CUSTOMERS

        _run(app, scenario)


class TestMutations:
    def test_add_customer_through_form_saves_snapshot(self, store):
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("a")
            await pilot.pause()
            assert isinstance(app.screen, RecordFormModal)

            await pilot.press("a", "n", "a", "tab", "5", "5", "5", "enter")
            await pilot.pause()
            assert not isinstance(app.screen, RecordFormModal)

        _run(app, scenario)

        assert app.customers.get_all() == [Customer(id=1, name="ana", phone="555")]
        assert store.load().customers == [Customer(id=1, name="ana", phone="555")]

    def test_empty_name_keeps_form_open(self, store):
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("a")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, RecordFormModal)
            assert app.screen.error == "Name required"

        _run(app, scenario)
        assert len(app.customers) == 0

    def test_delete_customer_after_confirmation(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("j", "d")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmModal)
            await pilot.press("y")
            await pilot.pause()

        _run(app, scenario)

        assert [c.name for c in app.customers.get_all()] == ["Bruno"]
        saved = store.load()
        assert [c.name for c in saved.customers] == ["Bruno"]
        assert saved.orders[0].customer_name == "Ana"


SODA = OrderItem(menu_item_id=2, menu_item_name="Soda", unit_price=1.25, quantity=3)
PIZZA = OrderItem(menu_item_id=1, menu_item_name="Pizza", unit_price=9.5, quantity=2)


class TestOrderModal:
    def test_add_order_saves_lines_and_total(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            assert isinstance(app.screen, OrderModal)

            # Soda x3, then Pizza with the default quantity.
            await pilot.press("tab", "right", "tab", "3", "enter")
            await pilot.press("shift+tab", "left", "enter", "ctrl+s")
            await pilot.pause()
            assert not isinstance(app.screen, OrderModal)

        _run(app, scenario)

        saved = store.load().orders
        assert [o.id for o in saved] == [3, 5, 6]
        new_order = saved[-1]
        assert (new_order.customer_id, new_order.customer_name) == (1, "Ana")
        assert new_order.items == [SODA, OrderItem(menu_item_id=1, menu_item_name="Pizza", unit_price=9.5, quantity=1)]
        assert new_order.total == 13.25

    def test_typed_quantity_replaces_default(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("tab", "tab", "5", "enter", "ctrl+s")
            await pilot.pause()

        _run(app, scenario)
        assert app.orders.get_all()[-1].items == [
            OrderItem(menu_item_id=1, menu_item_name="Pizza", unit_price=9.5, quantity=5)
        ]

    def test_non_ascii_digit_is_ignored_in_quantity(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("tab", "tab", "²")
            await pilot.pause()
            assert app.screen.quantity_text == "1"
            await pilot.press("4", "enter")
            await pilot.pause()
            assert [line.quantity for line in app.screen.draft_lines] == [4]

        _run(app, scenario)

    def test_requires_customer(self, store, sample_collections):
        store.save([], sample_collections[1], [])
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, OrderModal)
            assert app.screen.error == "Please add/select a customer."

        _run(app, scenario)
        assert len(app.orders) == 0

    def test_requires_at_least_one_item(self, store, sample_collections):
        store.save(*sample_collections[:2], [])
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, OrderModal)
            assert app.screen.error == "Add at least one item."

        _run(app, scenario)
        assert len(app.orders) == 0

    def test_requires_menu_items_to_add_line(self, store, sample_collections):
        store.save(sample_collections[0], [], [])
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("tab", "enter")
            await pilot.pause()
            assert app.screen.error == "Add menu items first."
            assert app.screen.draft_lines == []

        _run(app, scenario)

    def test_edit_keeps_created_at_and_deleted_customer(self, store, sample_collections):
        store.save(*sample_collections)
        original = sample_collections[2][1]
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "j", "j", "e")
            await pilot.pause()
            assert isinstance(app.screen, OrderModal)
            await pilot.press("ctrl+s")
            await pilot.pause()

        _run(app, scenario)

        edited = store.load().orders[1]
        assert edited.id == 5
        assert (edited.customer_id, edited.customer_name) == (9, "Deleted Customer")
        assert edited.created_at == original.created_at
        assert edited.items == original.items

    def test_remove_line_from_existing_order(self, store, sample_collections):
        store.save(*sample_collections)
        original = sample_collections[2][0]
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "j", "e")
            await pilot.pause()
            await pilot.press("tab", "tab", "tab", "down", "x", "ctrl+s")
            await pilot.pause()

        _run(app, scenario)

        edited = store.load().orders[0]
        assert edited.id == 3
        assert edited.items == [PIZZA]
        assert edited.total == 19.0
        assert edited.created_at == original.created_at

    def test_escape_discards_draft(self, store, sample_collections):
        store.save(*sample_collections)
        app = build_app(store)

        async def scenario(pilot):
            await pilot.press("o", "a")
            await pilot.pause()
            await pilot.press("tab", "enter", "escape")
            await pilot.pause()
            assert not isinstance(app.screen, OrderModal)

        _run(app, scenario)
        assert [o.id for o in app.orders.get_all()] == [3, 5]


class TestMain:
    def test_main_saves_on_shutdown(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(ManagementApp, "run", lambda self: self.customers.add("Late"))
        path = tmp_path / "state.db"

        try:
            main([str(path)])
        finally:
            logger.remove()

        assert [c.name for c in SnapshotStore(path).load().customers] == ["Late"]
        assert (tmp_path / "logs" / "rms.log").is_file()
