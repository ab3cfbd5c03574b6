from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from .message_utils import dispatch_message


class RetryRequested(Message):
    """Raised when the user asks to repeat a failed fetch."""

    pass


class NoticeScreen(ModalScreen[None]):
    """Blocking alert with a single Close button."""

    def __init__(self, message: str, *, title: str = "Notice") -> None:
        super().__init__()
        self._title = title
        self._message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self._title, classes="dialog-title"),
            Static(self._message, id="notice-message", classes="dialog-body"),
            Horizontal(
                Button("Close", id="notice-close", variant="primary"),
                classes="dialog-buttons",
            ),
            classes="dialog notice-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "notice-close":
            self.dismiss(None)

    def on_key(self, event: Key) -> None:  # pragma: no cover - keyboard shortcut
        if event.key in ("escape", "enter"):
            self.dismiss(None)


class FetchErrorScreen(ModalScreen[None]):
    """Shown when loading reports fails. Offers Retry."""

    def __init__(self, error: str) -> None:
        super().__init__()
        self._error = error

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("Could not load reports", classes="dialog-title"),
            Static(self._error, id="fetch-error-message", classes="dialog-body error"),
            Horizontal(
                Button("Retry", id="fetch-retry", variant="primary"),
                Button("Close", id="fetch-close"),
                classes="dialog-buttons",
            ),
            classes="dialog error-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fetch-retry":
            self.dismiss(None)
            dispatch_message(self.app, RetryRequested())
        elif event.button.id == "fetch-close":
            self.dismiss(None)

    def on_key(self, event: Key) -> None:  # pragma: no cover - keyboard shortcut
        if event.key == "escape":
            self.dismiss(None)
