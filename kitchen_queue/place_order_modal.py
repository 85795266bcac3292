"""Place-order modal screen."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from kitchen_queue.data import Catalog
from kitchen_queue.models import CHANNEL_PRIORITY, Category, Channel, MenuItem, validate_customer_name
from kitchen_queue.rendering import badge_style, format_money

_MAX_NAME_LENGTH = 24


@dataclass
class OrderRequest:
    """What the operator asked for; the queue assigns the id."""

    channel: Channel
    customer_name: str
    items: list[MenuItem] = field(default_factory=list)


class PlaceOrderModal(ModalScreen[OrderRequest | None]):
    """Collect channel, customer name and items for a new order."""

    CSS = """
    PlaceOrderModal {
        align: center middle;
        background: $background 60%;
    }

    #place-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #place-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #place-body {
        margin-bottom: 1;
        color: white;
    }

    #place-error {
        color: #ffb3b3;
    }

    #place-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    step = reactive("channel")
    cursor_index = reactive(0)

    def __init__(self, catalog: Catalog) -> None:
        super().__init__()
        self.catalog = catalog
        self.menu: list[MenuItem] = [item for category in Category for item in catalog.items_in(category)]
        self.channel: Channel | None = None
        self.name_value = ""
        self.items: list[MenuItem] = []
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="place-dialog"):
            yield Static("Place Order", id="place-title")
            yield Static(id="place-body")
            yield Static(id="place-error")
            yield Static(id="place-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if self.step == "channel":
            self._channel_key(event)
        elif self.step == "name":
            self._name_key(event)
        elif self._items_key(event):
            event.stop()
            return
        event.stop()
        self._refresh_content()

    def _channel_key(self, event: Key) -> None:
        choice = event.character if event.is_printable else None
        if choice and choice.isdigit() and 1 <= int(choice) <= len(CHANNEL_PRIORITY):
            self.channel = CHANNEL_PRIORITY[int(choice) - 1]
            self.error = ""
            self.step = "name"
            return
        self.error = "Invalid input. Please choose 1-4."

    def _name_key(self, event: Key) -> None:
        if event.key == "enter":
            try:
                validate_customer_name(self.name_value)
            except ValueError as exc:
                self.error = str(exc)
                return
            self.error = ""
            self.step = "items"
            return

        if event.key == "backspace":
            self.name_value = self.name_value[:-1]
            return

        if event.is_printable and event.character:
            if event.character.isspace():
                self.error = "Please enter a single word without spaces."
                return
            if len(self.name_value) < _MAX_NAME_LENGTH:
                self.name_value += event.character
            self.error = ""

    def _items_key(self, event: Key) -> bool:
        """Handle a key on the item step; True once the modal is dismissed."""
        if event.key in {"down", "j"}:
            self.cursor_index = (self.cursor_index + 1) % len(self.menu)
        elif event.key in {"up", "k"}:
            self.cursor_index = (self.cursor_index - 1) % len(self.menu)
        elif event.key == "enter":
            self.items.append(self.menu[self.cursor_index])
        elif event.key == "backspace":
            if self.items:
                self.items.pop()
        elif event.key in {"f", "ctrl+s"}:
            assert self.channel is not None
            self.dismiss(OrderRequest(channel=self.channel, customer_name=self.name_value, items=list(self.items)))
            return True
        return False

    def _refresh_content(self) -> None:
        body = self.query_one("#place-body", Static)
        help_text = self.query_one("#place-help", Static)
        self.query_one("#place-error", Static).update(self.error)

        content = Text(style="white")
        if self.step == "channel":
            content.append("Order Type:\n")
            for idx, channel in enumerate(CHANNEL_PRIORITY, start=1):
                content.append(f"\n {idx}. ")
                content.append(f" {channel.label} ", style=badge_style(channel))
            help_text.update("Press 1-4 to choose. Esc cancel.")
            body.update(content)
            return

        assert self.channel is not None
        content.append(f" {self.channel.label} ", style=badge_style(self.channel))
        if self.step == "name":
            content.append(f"\n\nFirst name: {self.name_value}|", style="bold white")
            help_text.update("Type a single word, Enter confirm, Esc cancel.")
            body.update(content)
            return

        content.append(f"  {self.name_value}\n")
        current_category: Category | None = None
        for idx, item in enumerate(self.menu):
            if item.category != current_category:
                current_category = item.category
                content.append(f"\n{current_category.label}:", style="bold")
            pointer = "➤ " if idx == self.cursor_index else "  "
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"\n{pointer}{item.name:<22}{format_money(item.price):>9}", style=style)

        content.append("\n\nAdded: ", style="bold")
        content.append(", ".join(item.name for item in self.items) or "(nothing yet)")
        help_text.update("J/K/↑/↓ move, Enter add, Backspace remove last, F finish, Esc cancel")
        body.update(content)
