from __future__ import annotations

import pytest

from kitchen_queue.data import Catalog, load_catalog
from kitchen_queue.models import Channel
from kitchen_queue.scheduler import OrderQueue


@pytest.fixture
def catalog() -> Catalog:
    return load_catalog()


@pytest.fixture
def queue() -> OrderQueue:
    return OrderQueue()


@pytest.fixture
def place(queue: OrderQueue, catalog: Catalog):
    """Place an order by channel, name and item codes."""

    def _place(channel: Channel, name: str, *codes: int):
        return queue.place_order(channel, name, [catalog.item(code) for code in codes or (9,)])

    return _place
