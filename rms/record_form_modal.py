"""Customer / menu item entry modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from rms.constant import FORM_FIELDS, MAX_FIELD_LENGTH, VIEW_NOUNS
from rms.forms import CustomerFields, FormError, MenuItemFields, parse_record_form


class RecordFormModal(ModalScreen[CustomerFields | MenuItemFields | None]):
    """Prompt for the fields of a customer or menu item."""

    CSS = """
    RecordFormModal {
        align: center middle;
        background: $background 60%;
    }

    #record-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #record-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #record-fields {
        color: white;
        margin-bottom: 1;
    }

    #record-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #record-help {
        color: #dddddd;
    }
    """

    def __init__(self, view: str, values: dict[str, str] | None = None, record_id: int | None = None) -> None:
        super().__init__()
        self.view = view
        self.fields = FORM_FIELDS[view]
        self.values = {key: "" for key, _ in self.fields}
        if values:
            self.values.update({key: value for key, value in values.items() if key in self.values})
        self.record_id = record_id
        self.field_index = 0
        self.error = ""

    @property
    def title_text(self) -> str:
        noun = VIEW_NOUNS[self.view].title()
        if self.record_id is None:
            return f"New {noun}"
        return f"Edit {noun} #{self.record_id}"

    def compose(self) -> ComposeResult:
        with Container(id="record-dialog"):
            yield Static(self.title_text, id="record-title")
            yield Static(id="record-fields")
            yield Static(id="record-error")
            yield Static("Tab next field. Enter confirm. Backspace delete. Esc/Ctrl+C cancel.", id="record-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()

        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            return

        if event.key == "enter":
            self._confirm()
            return

        if event.key in {"tab", "down"}:
            self.field_index = (self.field_index + 1) % len(self.fields)
            self._refresh_content()
            return

        if event.key in {"shift+tab", "up"}:
            self.field_index = (self.field_index - 1) % len(self.fields)
            self._refresh_content()
            return

        key = self.fields[self.field_index][0]
        if event.key == "backspace":
            if self.values[key]:
                self.values[key] = self.values[key][:-1]
                self.error = ""
                self._refresh_content()
            return

        if event.is_printable and event.character:
            if len(self.values[key]) < MAX_FIELD_LENGTH:
                self.values[key] += event.character
            self.error = ""
            self._refresh_content()

    def _confirm(self) -> None:
        try:
            parsed = parse_record_form(self.view, self.values)
        except FormError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(parsed)

    def _refresh_content(self) -> None:
        content = Text()
        for idx, (key, label) in enumerate(self.fields):
            if idx > 0:
                content.append("\n")
            active = idx == self.field_index
            pointer = "➤ " if active else "  "
            content.append(f"{pointer}{label}: ", style="bold" if active else None)
            content.append(self.values[key])
            if active:
                content.append("|", style="bold")
        self.query_one("#record-fields", Static).update(content)
        self.query_one("#record-error", Static).update(self.error or "")
