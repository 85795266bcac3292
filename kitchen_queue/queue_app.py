"""Main Textual app class."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.widgets import Header, Static

from kitchen_queue.data import Catalog
from kitchen_queue.order_id_modal import OrderIdModal
from kitchen_queue.persistence import save_queue
from kitchen_queue.place_order_modal import OrderRequest, PlaceOrderModal
from kitchen_queue.rendering import format_order_table, format_receipt, format_ticket
from kitchen_queue.scheduler import EmptyOrderError, OrderQueue, OrderQueueError

logger = logging.getLogger(__name__)

MAIN_MENU = (
    ("1", "Place an order"),
    ("2", "Get the next order to cook"),
    ("3", "Get current order details"),
    ("4", "Mark current order as complete"),
    ("5", "List all orders waiting to be picked up"),
    ("6", "Mark order as ready for pick up"),
    ("7", "Cancel an order"),
    ("0", "Save and exit"),
)


class KitchenQueueApp(App):
    """Menu-driven console for placing and cooking restaurant orders."""

    TITLE = "Restaurant Ordering System"
    SUB_TITLE = "Kitchen Queue"

    CSS = """
    #orders-pane {
        width: 3fr;
        border: round $primary;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
    }

    #menu, #status {
        margin-bottom: 1;
    }

    #status {
        color: $warning;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "save_and_exit", "Save + Quit", priority=True),
    ]

    def __init__(
        self,
        catalog: Catalog,
        order_queue: OrderQueue,
        output_path: str | Path,
        load_error: str | None = None,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        self.order_queue = order_queue
        self.output_path = Path(output_path)
        self.system_status = f"Order file damaged, loading stopped: {load_error}" if load_error else ""
        self.detail: Text = Text()
        self._commands = {
            "1": self.action_place_order,
            "2": self.action_next_to_cook,
            "3": self.action_current_order,
            "4": self.action_complete_current,
            "5": self.action_list_pickup,
            "6": self.action_mark_ready,
            "7": self.action_cancel_order,
            "0": self.action_save_and_exit,
        }

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="orders-pane"):
                yield Static(Text("All Orders", style="bold"))
                yield Static(id="orders-list")
            with Vertical(id="side-pane"):
                yield Static(id="menu")
                yield Static(id="status")
                yield Static(id="detail")

    def on_mount(self) -> None:
        logger.debug("app_mount orders=%s", len(self.order_queue))
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, (PlaceOrderModal, OrderIdModal)):
            return
        if not event.is_printable or not event.character:
            return

        command = self._commands.get(event.character)
        event.stop()
        if command is None:
            self._report("Invalid choice. Please try again.")
            return
        logger.debug("command key=%s", event.character)
        command()

    def action_place_order(self) -> None:
        self.push_screen(PlaceOrderModal(self.catalog), callback=self._place_requested_order)

    def _place_requested_order(self, request: OrderRequest | None) -> None:
        if request is None:
            self._report("Order entry canceled")
            return
        try:
            order = self.order_queue.place_order(request.channel, request.customer_name, request.items)
        except EmptyOrderError:
            self._report("Nothing was added to the order. Canceling and returning to menu.")
            return
        except ValueError as exc:
            self._report(str(exc))
            return
        self.detail = format_receipt(order)
        self._report(f"Order #{order.order_id} placed")

    def action_next_to_cook(self) -> None:
        order = self.order_queue.select_next_to_cook()
        if order is None:
            self._report("No orders found!")
            return
        self.detail = format_ticket(order)
        self._report(f"Order #{order.order_id} marked as {order.status.label}")

    def action_current_order(self) -> None:
        try:
            order = self.order_queue.current_order()
        except OrderQueueError as exc:
            self._report(str(exc))
            return
        self.detail = format_ticket(order)
        self._report(f"Current order #{order.order_id}")

    def action_complete_current(self) -> None:
        try:
            order = self.order_queue.complete_current_order()
        except OrderQueueError as exc:
            self._report(str(exc))
            return
        self.detail = format_ticket(order)
        self._report(f"Order #{order.order_id} marked as {order.status.label}")

    def action_list_pickup(self) -> None:
        self.detail = format_order_table(self.order_queue.pickup_waiting(), empty="(nobody waiting for pickup)")
        self._report("Orders waiting to be picked up")

    def action_mark_ready(self) -> None:
        modal = OrderIdModal(
            "Mark order ready for pick up", self.order_queue.completed_orders(), "(no completed orders)"
        )
        self.push_screen(modal, callback=self._mark_ready)

    def _mark_ready(self, order_id: int | None) -> None:
        if order_id is None:
            self._refresh_all()
            return
        try:
            order = self.order_queue.mark_ready_for_pickup(order_id)
        except OrderQueueError as exc:
            self._report(str(exc))
            return
        self._report(f"Order #{order.order_id} marked as {order.status.label}")

    def action_cancel_order(self) -> None:
        if not self.order_queue.orders:
            self._report("There are no orders available to cancel.")
            return
        modal = OrderIdModal("Cancel an order", self.order_queue.placed_orders(), "(no placed orders)")
        self.push_screen(modal, callback=self._cancel)

    def _cancel(self, order_id: int | None) -> None:
        if order_id is None:
            self._refresh_all()
            return
        try:
            order = self.order_queue.cancel_order(order_id)
        except OrderQueueError as exc:
            self._report(str(exc))
            return
        self._report(f"Order #{order.order_id} canceled")

    def action_save_and_exit(self) -> None:
        try:
            save_queue(self.order_queue, self.output_path)
        except OSError as exc:
            logger.exception("save_failed path=%s", self.output_path)
            self._report(f"Save failed: {exc}")
            return
        self.exit()

    def _report(self, message: str) -> None:
        self.system_status = message
        self._refresh_all()

    def _refresh_all(self) -> None:
        try:
            orders_widget = self.query_one("#orders-list", Static)
        except NoMatches:
            return
        orders_widget.update(format_order_table(self.order_queue.orders, empty="(no orders yet)"))
        self._refresh_menu()
        self.query_one("#status", Static).update(self.system_status or "Ready")
        self.query_one("#detail", Static).update(self.detail)

    def _refresh_menu(self) -> None:
        text = Text()
        for idx, (key, label) in enumerate(MAIN_MENU):
            if idx > 0:
                text.append("\n")
            text.append(f"{key}. ", style="bold")
            text.append(label)
        self.query_one("#menu", Static).update(text)
