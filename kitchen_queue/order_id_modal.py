"""Modal for choosing which order an action applies to."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from kitchen_queue.models import Order
from kitchen_queue.rendering import format_order_table

_MAX_DIGITS = 6


class OrderIdModal(ModalScreen[int | None]):
    """Pick an order by typing its id or stepping through the listed candidates.

    Any id may be typed, listed or not; the queue decides whether it is
    eligible and reports "not found" otherwise.
    """

    CSS = """
    OrderIdModal {
        align: center middle;
        background: $background 60%;
    }

    #order-id-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #order-id-entry {
        border: heavy $secondary;
        padding: 0 1;
        margin: 1 0;
    }
    """

    def __init__(self, heading: str, candidates: Sequence[Order], empty: str = "(no orders)") -> None:
        super().__init__()
        self.heading = heading
        self.candidates = list(candidates)
        self.empty_text = empty
        self.typed = ""
        self.pick_index: int | None = None
        self.hint = ""

    def compose(self) -> ComposeResult:
        with Container(id="order-id-dialog"):
            yield Static(Text(self.heading, style="bold"))
            yield Static(id="order-id-list")
            yield Static(id="order-id-entry")
            yield Static(id="order-id-hint")

    def on_mount(self) -> None:
        self._refresh_listing()

    def on_key(self, event: Key) -> None:
        event.stop()
        key = event.key
        if key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
            return
        if key == "enter":
            if self.typed:
                self.dismiss(int(self.typed))
                return
            self.hint = "Type an order id or use ↑/↓ to pick one."
        elif key in {"up", "down", "k", "j"}:
            self._step(-1 if key in {"up", "k"} else 1)
        elif key == "backspace":
            self.typed = self.typed[:-1]
            self.pick_index = None
        elif event.is_printable and event.character and event.character.isdigit():
            if len(self.typed) < _MAX_DIGITS:
                self.typed += event.character
            self.pick_index = None
            self.hint = ""
        elif event.is_printable:
            self.hint = "Please enter a valid order id."
        self._refresh_listing()

    def _step(self, delta: int) -> None:
        if not self.candidates:
            self.hint = "Nothing to pick from; type an id instead."
            return
        if self.pick_index is None:
            self.pick_index = 0 if delta > 0 else len(self.candidates) - 1
        else:
            self.pick_index = (self.pick_index + delta) % len(self.candidates)
        self.typed = str(self.candidates[self.pick_index].order_id)
        self.hint = ""

    def _refresh_listing(self) -> None:
        listing = format_order_table(self.candidates, empty=self.empty_text)
        if self.pick_index is not None:
            # Header occupies the first line of the table.
            listing.stylize("reverse", *self._line_span(listing.plain, self.pick_index + 1))
        self.query_one("#order-id-list", Static).update(listing)
        self.query_one("#order-id-entry", Static).update(f"Order id: {self.typed}|")
        self.query_one("#order-id-hint", Static).update(Text(self.hint, style="#ffb3b3"))

    @staticmethod
    def _line_span(plain: str, line_no: int) -> tuple[int, int]:
        lines = plain.split("\n")
        start = sum(len(line) + 1 for line in lines[:line_no])
        return start, start + len(lines[line_no])
