"""Rendering helpers for orders, tickets and receipts."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from rich.text import Text

from kitchen_queue.models import Channel, Order, Status

_TICKET_RULE = "-" * 33


def badge_style(channel: Channel) -> str:
    """Return a consistent badge style per order channel."""
    if channel == Channel.DRIVE_THROUGH:
        return "bold #ffffff on #b23a48"
    if channel == Channel.ONSITE:
        return "bold #0b1f0f on #5fbf72"
    if channel == Channel.PHONE:
        return "bold #ffffff on #2f6db5"
    return "bold #ffffff on #c2571a"


def status_style(status: Status) -> str:
    if status == Status.COOKING:
        return "bold yellow"
    if status == Status.READY_FOR_PICKUP:
        return "bold green"
    if status == Status.COMPLETE:
        return "green"
    return "white"


def format_money(amount: Decimal) -> str:
    return f"${amount.quantize(Decimal('0.01'))}"


def format_order_label(order: Order) -> Text:
    """Render `#id NAME` with a colored channel tag."""
    text = Text()
    text.append(f" {order.channel.label} ", style=badge_style(order.channel))
    text.append(f" #{order.order_id} {order.customer_name}")
    return text


def _append_items(text: Text, order: Order) -> None:
    for item in order.items:
        text.append(f"\n  {item.name:<22}{format_money(item.price):>9}")
    text.append("\n")
    if order.service_fee:
        text.append(f"\n  {'DoorDash service fee 5%':<22}{format_money(order.service_fee):>9}")
    text.append(f"\n  {'Total':<22}{format_money(order.total):>9}", style="bold")


def format_ticket(order: Order) -> Text:
    """Kitchen view of a single order."""
    text = Text()
    text.append(f"{order.customer_name.upper():>10}   {order.order_id}", style="bold")
    text.append("  ")
    text.append(f" {order.channel.label} ", style=badge_style(order.channel))
    text.append("  ")
    text.append(order.status.label, style=status_style(order.status))
    _append_items(text, order)
    return text


def format_receipt(order: Order) -> Text:
    """Customer-facing confirmation shown after placing an order."""
    text = Text()
    text.append(f"{_TICKET_RULE}\n")
    text.append(f"    THANK YOU {order.customer_name.upper():>10}!\n", style="bold")
    text.append(_TICKET_RULE)
    _append_items(text, order)
    text.append(f"\n{_TICKET_RULE}")
    return text


def format_order_table(orders: Sequence[Order], empty: str = "(no orders)") -> Text:
    """One row per order: name, id, channel and status."""
    text = Text()
    text.append(f"{'NAME':<12} | {'ID':>4} | {'TYPE':<13} | STATUS", style="bold")
    if not orders:
        text.append(f"\n{empty}", style="dim")
        return text

    for order in orders:
        text.append(f"\n{order.customer_name:<12} | {order.order_id:>4} | ")
        text.append(f"{order.channel.label:<13}", style=badge_style(order.channel))
        text.append(" | ")
        text.append(order.status.label, style=status_style(order.status))
        if order.is_overdue:
            text.append("  (overdue)", style="bold red")
    return text
