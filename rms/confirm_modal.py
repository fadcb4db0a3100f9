"""Yes / no confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ConfirmModal(ModalScreen[bool]):
    """Ask the user to confirm a destructive action."""

    CSS = """
    ConfirmModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 48;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #confirm-message {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirm-help {
        color: #dddddd;
    }
    """

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static(self.prompt, id="confirm-message")
            yield Static("y / Enter confirm. n / Esc / q cancel.", id="confirm-help")

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"y", "enter"}:
            self.dismiss(True)
            return
        if event.key in {"n", "q", "escape", "ctrl+c"}:
            self.dismiss(False)
