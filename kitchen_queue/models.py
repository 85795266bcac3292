"""Domain models for kitchen-queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum

from kitchen_queue.config import DOORDASH_FEE_RATE, MAX_SKIP_COUNT
from kitchen_queue.constant import CATEGORY_LABELS, CHANNEL_LABELS, STATUS_LABELS

# Drive-through/onsite orders carry this instead of a skip count.
NO_SKIP_COUNT = -1


class Category(str, Enum):
    """Menu section an item is listed under."""

    DRINK = "drink"
    APPETIZER = "appetizer"
    ENTREE = "entree"
    DESSERT = "dessert"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.value]


class Channel(IntEnum):
    """How the order reaches the customer. Values are the file codes."""

    DRIVE_THROUGH = 0
    ONSITE = 1
    PHONE = 2
    DOORDASH = 3

    @property
    def label(self) -> str:
        return CHANNEL_LABELS[self.value]

    @property
    def ages(self) -> bool:
        """Whether orders on this channel accumulate skip counts."""
        return self in (Channel.PHONE, Channel.DOORDASH)


class Status(IntEnum):
    """Order lifecycle step. Values are the file codes."""

    PLACED = 0
    COOKING = 1
    COMPLETE = 2
    READY_FOR_PICKUP = 3

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.value]


# Channels in the order the kitchen serves them.
CHANNEL_PRIORITY: tuple[Channel, ...] = (
    Channel.DRIVE_THROUGH,
    Channel.ONSITE,
    Channel.PHONE,
    Channel.DOORDASH,
)

_NEXT_STATUS: dict[Status, Status] = {
    Status.PLACED: Status.COOKING,
    Status.COOKING: Status.COMPLETE,
    Status.COMPLETE: Status.READY_FOR_PICKUP,
}


class OrderStateError(RuntimeError):
    """Raised when an order is asked to move out of a status it is not in."""


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry."""

    item_id: int
    name: str
    price: Decimal
    category: Category


def validate_customer_name(name: str) -> str:
    """Return the name if it is a single non-empty token, else raise ValueError."""
    if not name or any(ch.isspace() for ch in name):
        raise ValueError("Customer name must be a single word without spaces")
    return name


def initial_skip_count(channel: Channel) -> int:
    return 0 if channel.ages else NO_SKIP_COUNT


@dataclass
class Order:
    """One customer order and its place in the kitchen workflow."""

    order_id: int
    customer_name: str
    channel: Channel
    items: list[MenuItem] = field(default_factory=list)
    skip_count: int = NO_SKIP_COUNT
    status: Status = Status.PLACED

    @classmethod
    def create(cls, order_id: int, customer_name: str, channel: Channel, items: list[MenuItem]) -> Order:
        """Build a freshly placed order with the channel's starting skip count."""
        return cls(
            order_id=order_id,
            customer_name=customer_name,
            channel=channel,
            items=list(items),
            skip_count=initial_skip_count(channel),
            status=Status.PLACED,
        )

    def increase_skip_count(self) -> None:
        if self.skip_count == NO_SKIP_COUNT:
            return
        if self.skip_count < MAX_SKIP_COUNT:
            self.skip_count += 1

    @property
    def is_overdue(self) -> bool:
        """True once the order has been skipped enough to be promoted."""
        return self.status == Status.PLACED and self.skip_count == MAX_SKIP_COUNT

    @property
    def subtotal(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0.00"))

    @property
    def service_fee(self) -> Decimal:
        if self.channel != Channel.DOORDASH:
            return Decimal("0.00")
        return (self.subtotal * DOORDASH_FEE_RATE).quantize(Decimal("0.01"))

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.service_fee

    def advance(self, expected: Status) -> Status:
        """Move one step forward, provided the order is currently in `expected`."""
        if self.status != expected or self.status not in _NEXT_STATUS:
            raise OrderStateError(f"Order #{self.order_id} is {self.status.label}, not {expected.label}")
        self.status = _NEXT_STATUS[self.status]
        return self.status
