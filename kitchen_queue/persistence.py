"""Flat text-file persistence for the order queue.

File layout (whitespace separated)::

    <current_index> <next_id>
    <id> <name> <channel> <skip_count> <status>
    <item_count> <item0> <item1> ...
    ...

The header is only written when there is at least one order. Existing files
are read back with ``item_count - 1`` item codes, so the last item of every
order is dropped on reload; set ``LEGACY_DROP_LAST_ITEM`` off to read all of
them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from kitchen_queue.config import LEGACY_DROP_LAST_ITEM, MAX_SKIP_COUNT
from kitchen_queue.data import Catalog
from kitchen_queue.models import NO_SKIP_COUNT, Channel, Order, Status
from kitchen_queue.scheduler import OrderQueue

logger = logging.getLogger(__name__)

_NO_CURRENT_INDEX = -1


class RecordFormatError(ValueError):
    """Raised for a record that cannot be read back."""


@dataclass(frozen=True)
class LoadedQueue:
    """Result of reading an order file; `error` is set when reading stopped early."""

    queue: OrderQueue
    error: str | None = None


def _to_int(token: str, what: str, line_no: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise RecordFormatError(f"line {line_no}: {what} {token!r} is not a number") from None


def _parse_header(line: str, line_no: int) -> tuple[int | None, int]:
    tokens = line.split()
    if len(tokens) != 2:
        raise RecordFormatError(f"line {line_no}: header needs current index and next id")
    current_index = _to_int(tokens[0], "current index", line_no)
    next_id = _to_int(tokens[1], "next id", line_no)
    if next_id < 0:
        raise RecordFormatError(f"line {line_no}: next id must not be negative")
    return (None if current_index < 0 else current_index), next_id


def _parse_record(order_line: str, items_line: str | None, line_no: int, catalog: Catalog, legacy: bool) -> Order:
    tokens = order_line.split()
    if len(tokens) != 5:
        raise RecordFormatError(f"line {line_no}: order record needs 5 fields, got {len(tokens)}")

    order_id = _to_int(tokens[0], "order id", line_no)
    name = tokens[1]
    channel_code = _to_int(tokens[2], "channel", line_no)
    skip_count = _to_int(tokens[3], "skip count", line_no)
    status_code = _to_int(tokens[4], "status", line_no)

    try:
        channel = Channel(channel_code)
    except ValueError:
        raise RecordFormatError(f"line {line_no}: unknown channel code {channel_code}") from None
    try:
        status = Status(status_code)
    except ValueError:
        raise RecordFormatError(f"line {line_no}: unknown status code {status_code}") from None
    if not (NO_SKIP_COUNT <= skip_count <= MAX_SKIP_COUNT):
        raise RecordFormatError(f"line {line_no}: skip count {skip_count} out of range")

    if items_line is None:
        raise RecordFormatError(f"line {line_no + 1}: missing item line for order #{order_id}")
    item_tokens = items_line.split()
    if not item_tokens:
        raise RecordFormatError(f"line {line_no + 1}: empty item line for order #{order_id}")
    item_count = _to_int(item_tokens[0], "item count", line_no + 1)
    codes = [_to_int(token, "item code", line_no + 1) for token in item_tokens[1:]]
    if item_count < 0 or len(codes) != item_count:
        raise RecordFormatError(f"line {line_no + 1}: item count {item_count} does not match {len(codes)} codes")

    if legacy:
        codes = codes[: max(0, item_count - 1)]
    unknown = [code for code in codes if code not in catalog]
    if unknown:
        raise RecordFormatError(f"line {line_no + 1}: unknown item code {unknown[0]}")

    return Order(
        order_id=order_id,
        customer_name=name,
        channel=channel,
        items=[catalog.item(code) for code in codes],
        skip_count=skip_count,
        status=status,
    )


def parse_orders(text: str, catalog: Catalog, legacy: bool = LEGACY_DROP_LAST_ITEM) -> LoadedQueue:
    """Read an order file body. A malformed record stops reading; earlier orders are kept."""
    numbered = [(no, line) for no, line in enumerate(text.splitlines(), start=1) if line.strip()]
    if not numbered:
        return LoadedQueue(queue=OrderQueue())

    header_no, header_line = numbered[0]
    try:
        current_index, next_id = _parse_header(header_line, header_no)
    except RecordFormatError as exc:
        logger.warning("load_failed error=%s", exc)
        return LoadedQueue(queue=OrderQueue(), error=str(exc))

    orders: list[Order] = []
    seen_ids: set[int] = set()
    error: str | None = None
    rest = numbered[1:]
    for pos in range(0, len(rest), 2):
        line_no, order_line = rest[pos]
        items_line = rest[pos + 1][1] if pos + 1 < len(rest) else None
        try:
            order = _parse_record(order_line, items_line, line_no, catalog, legacy)
            if order.order_id in seen_ids:
                raise RecordFormatError(f"line {line_no}: duplicate order id {order.order_id}")
        except RecordFormatError as exc:
            error = str(exc)
            logger.warning("load_stopped orders_read=%s error=%s", len(orders), exc)
            break
        seen_ids.add(order.order_id)
        orders.append(order)

    highest_id = max(seen_ids, default=0)
    if next_id < highest_id:
        logger.warning("next_id_behind next_id=%s highest=%s", next_id, highest_id)
        next_id = highest_id
    if current_index is not None and current_index >= len(orders):
        current_index = None

    return LoadedQueue(queue=OrderQueue.restore(orders, next_id, current_index), error=error)


def dump_orders(queue: OrderQueue) -> str:
    """Serialize the queue in the flat record layout."""
    if not queue.orders:
        return ""

    current_index = _NO_CURRENT_INDEX if queue.current_index is None else queue.current_index
    lines = [f"{current_index} {queue.next_id}"]
    for order in queue.orders:
        lines.append(
            f"{order.order_id} {order.customer_name} {int(order.channel)} {order.skip_count} {int(order.status)}"
        )
        lines.append(" ".join([str(len(order.items)), *(str(item.item_id) for item in order.items)]))
    return "\n".join(lines)


def load_queue(path: str | Path, catalog: Catalog, legacy: bool = LEGACY_DROP_LAST_ITEM) -> LoadedQueue:
    """Load the queue from disk. A missing file is an empty queue."""
    data_file = Path(path)
    if not data_file.is_file():
        logger.info("load_skipped path=%s reason=missing", data_file)
        return LoadedQueue(queue=OrderQueue())

    loaded = parse_orders(data_file.read_text(encoding="utf-8"), catalog, legacy=legacy)
    logger.info("load_done path=%s orders=%s next_id=%s", data_file, len(loaded.queue), loaded.queue.next_id)
    return loaded


def save_queue(queue: OrderQueue, path: str | Path) -> None:
    """Write the queue to disk, creating the parent directory if needed."""
    data_file = Path(path)
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text(dump_orders(queue), encoding="utf-8")
    logger.info("save_done path=%s orders=%s", data_file, len(queue))
