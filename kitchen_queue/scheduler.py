"""Order queue: placement, cook selection and status transitions.

Selection follows a strict channel priority (drive-through, onsite, phone,
DoorDash). Every time a drive-through or onsite order is picked, phone and
DoorDash orders queued ahead of it age by one skip. Once one of them reaches
the skip cap it is cooked in place of the next drive-through/onsite pick.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from kitchen_queue.models import (
    CHANNEL_PRIORITY,
    Channel,
    MenuItem,
    Order,
    OrderStateError,
    Status,
    validate_customer_name,
)

logger = logging.getLogger(__name__)

PICKUP_CHANNELS: tuple[Channel, ...] = (Channel.ONSITE, Channel.PHONE, Channel.DOORDASH)


class OrderQueueError(Exception):
    """Base class for order queue failures reported to the operator."""


class EmptyOrderError(OrderQueueError, ValueError):
    """Raised when an order is placed without any items."""


class OrderNotFoundError(OrderQueueError, LookupError):
    """Raised when no eligible order carries the requested id."""


class NoCurrentOrderError(OrderQueueError):
    """Raised when no order has been selected for cooking yet."""


class CurrentOrderStateError(OrderQueueError, OrderStateError):
    """Raised when the current order cannot take the requested transition."""


class OrderQueue:
    """Owns the live order list and decides what the kitchen cooks next."""

    def __init__(self) -> None:
        self.orders: list[Order] = []
        self.next_id = 0
        self.current_index: int | None = None

    @classmethod
    def restore(cls, orders: Iterable[Order], next_id: int, current_index: int | None) -> OrderQueue:
        """Rebuild a queue from persisted state."""
        queue = cls()
        queue.orders = list(orders)
        queue.next_id = next_id
        if current_index is not None and 0 <= current_index < len(queue.orders):
            queue.current_index = current_index
        return queue

    def __len__(self) -> int:
        return len(self.orders)

    def place_order(self, channel: Channel, customer_name: str, items: Sequence[MenuItem]) -> Order:
        """Create and queue an order. The id is consumed even when nothing is added."""
        validate_customer_name(customer_name)
        self.next_id += 1
        order = Order.create(self.next_id, customer_name, Channel(channel), list(items))
        if not order.items:
            logger.info("order_discarded id=%s reason=no_items", order.order_id)
            raise EmptyOrderError("Nothing was added to the order")

        self.orders.append(order)
        logger.info(
            "order_placed id=%s channel=%s items=%s", order.order_id, order.channel.name, len(order.items)
        )
        return order

    def select_next_to_cook(self) -> Order | None:
        """Start cooking the next order by channel priority, or return None if nothing is waiting."""
        for channel in CHANNEL_PRIORITY:
            order = self.scan_channel(channel)
            if order is not None:
                return order
        logger.info("select_next_to_cook none_found")
        return None

    def scan_channel(self, channel: Channel) -> Order | None:
        found = self._first_waiting(channel)
        if found is None:
            return None

        chosen = found
        if not channel.ages:
            chosen = self._overdue_before(found)
            self._age_before(found)

        order = self.orders[chosen]
        order.advance(Status.PLACED)
        self.current_index = chosen
        logger.info(
            "order_cooking id=%s channel=%s scanned=%s promoted=%s",
            order.order_id,
            order.channel.name,
            channel.name,
            chosen != found,
        )
        return order

    def _first_waiting(self, channel: Channel) -> int | None:
        only_order = len(self.orders) == 1
        for idx, order in enumerate(self.orders):
            if order.status != Status.PLACED or order.channel != channel:
                continue
            if only_order or idx != self.current_index:
                return idx
        return None

    def _overdue_before(self, index: int) -> int:
        """Index of the first overdue phone order ahead of `index`, else DoorDash, else `index`."""
        for channel in (Channel.PHONE, Channel.DOORDASH):
            for idx in range(index):
                order = self.orders[idx]
                if order.channel == channel and order.is_overdue:
                    return idx
        return index

    def _age_before(self, index: int) -> None:
        for order in self.orders[:index]:
            if order.channel.ages:
                order.increase_skip_count()

    def current_order(self) -> Order:
        if self.current_index is None:
            raise NoCurrentOrderError("No order has been selected for cooking")
        return self.orders[self.current_index]

    def complete_current_order(self) -> Order:
        order = self.current_order()
        try:
            order.advance(Status.COOKING)
        except OrderStateError as exc:
            raise CurrentOrderStateError(str(exc)) from exc
        logger.info("order_complete id=%s", order.order_id)
        return order

    def find_order(self, order_id: int, status: Status) -> Order:
        for order in self.orders:
            if order.order_id == order_id and order.status == status:
                return order
        raise OrderNotFoundError(f"ID #{order_id} not found")

    def mark_ready_for_pickup(self, order_id: int) -> Order:
        order = self.find_order(order_id, Status.COMPLETE)
        order.advance(Status.COMPLETE)
        logger.info("order_ready id=%s", order.order_id)
        return order

    def cancel_order(self, order_id: int) -> Order:
        """Remove a placed order. Orders already cooking or done cannot be canceled."""
        order = self.find_order(order_id, Status.PLACED)
        idx = self.orders.index(order)
        del self.orders[idx]

        # Keep pointing at the same order after the list shifts.
        if self.current_index == idx:
            self.current_index = None
        elif self.current_index is not None and idx < self.current_index:
            self.current_index -= 1
        logger.info("order_canceled id=%s", order.order_id)
        return order

    def orders_with(self, status: Status, channels: Iterable[Channel] = CHANNEL_PRIORITY) -> list[Order]:
        wanted = set(channels)
        return [order for order in self.orders if order.status == status and order.channel in wanted]

    def pickup_waiting(self) -> list[Order]:
        """Orders ready for pickup. Drive-through orders are handed out at the window instead."""
        return self.orders_with(Status.READY_FOR_PICKUP, PICKUP_CHANNELS)

    def placed_orders(self) -> list[Order]:
        return self.orders_with(Status.PLACED)

    def completed_orders(self) -> list[Order]:
        return self.orders_with(Status.COMPLETE)
