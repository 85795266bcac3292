from __future__ import annotations

import pytest

from kitchen_queue.models import Channel, Order, OrderStateError, Status
from kitchen_queue.scheduler import (
    CurrentOrderStateError,
    EmptyOrderError,
    NoCurrentOrderError,
    OrderNotFoundError,
    OrderQueue,
)

DT = Channel.DRIVE_THROUGH
ONSITE = Channel.ONSITE
PHONE = Channel.PHONE
DOORDASH = Channel.DOORDASH


def test_place_order_appends_placed_order(queue, place):
    order = place(PHONE, "Bo", 9, 14)
    assert queue.orders == [order]
    assert order.order_id == 1
    assert order.status == Status.PLACED
    assert order.skip_count == 0
    assert [item.item_id for item in order.items] == [9, 14]


def test_ids_never_reused_after_empty_order_and_cancel(queue, place):
    first = place(DT, "Al")
    with pytest.raises(EmptyOrderError):
        queue.place_order(ONSITE, "Bo", [])
    queue.cancel_order(first.order_id)
    second = place(ONSITE, "Cy")

    assert second.order_id == 3
    assert queue.next_id == 3
    assert queue.orders == [second]


def test_invalid_name_is_rejected_before_id_is_assigned(queue, catalog):
    with pytest.raises(ValueError):
        queue.place_order(DT, "Al Bo", [catalog.item(0)])
    assert queue.next_id == 0
    assert not queue.orders


def test_channel_priority(queue, place):
    doordash = place(DOORDASH, "Dd")
    phone = place(PHONE, "Ph")
    onsite = place(ONSITE, "On")
    drive = place(DT, "Dt")

    picked = [queue.select_next_to_cook() for _ in range(4)]

    assert picked == [drive, onsite, phone, doordash]
    assert all(order.status == Status.COOKING for order in picked)
    assert queue.select_next_to_cook() is None


def test_select_ages_phone_and_doordash_queued_ahead(queue, place):
    phone = place(PHONE, "Ph")
    doordash = place(DOORDASH, "Dd")
    onsite_early = place(ONSITE, "On")
    place(DT, "Dt")
    phone_after = place(PHONE, "Late")

    queue.select_next_to_cook()

    assert phone.skip_count == 1
    assert doordash.skip_count == 1
    assert onsite_early.skip_count == -1
    assert phone_after.skip_count == 0


def test_phone_or_doordash_selection_does_not_age(queue, place):
    first = place(DOORDASH, "Dd")
    place(PHONE, "Ph")

    queue.select_next_to_cook()

    assert first.skip_count == 0


def test_overdue_phone_order_is_promoted(queue, place):
    for idx in range(5):
        place(DOORDASH if idx % 2 == 0 else PHONE, f"W{idx}")
    drive = place(DT, "Dt")
    overdue = queue.orders[1]
    overdue.skip_count = 3

    picked = queue.select_next_to_cook()

    assert picked is overdue
    assert queue.current_index == 1
    assert overdue.status == Status.COOKING
    assert drive.status == Status.PLACED
    assert [order.skip_count for order in queue.orders[:5]] == [1, 3, 1, 1, 1]


def test_phone_promoted_before_earlier_doordash(queue, place):
    doordash = place(DOORDASH, "Dd")
    phone = place(PHONE, "Ph")
    place(ONSITE, "On")
    doordash.skip_count = 3
    phone.skip_count = 3

    assert queue.select_next_to_cook() is phone


def test_overdue_doordash_promoted_when_no_phone(queue, place):
    place(PHONE, "Ph")
    doordash = place(DOORDASH, "Dd")
    place(ONSITE, "On")
    doordash.skip_count = 3

    assert queue.select_next_to_cook() is doordash


def test_overdue_order_behind_selected_is_not_promoted(queue, place):
    drive = place(DT, "Dt")
    phone = place(PHONE, "Ph")
    phone.skip_count = 3

    assert queue.select_next_to_cook() is drive
    assert phone.status == Status.PLACED


def test_three_skips_earn_promotion(queue, place):
    phone = place(PHONE, "Ph")
    drives = [place(DT, f"D{idx}") for idx in range(4)]

    assert queue.select_next_to_cook() is drives[0]
    assert queue.select_next_to_cook() is drives[1]
    assert queue.select_next_to_cook() is drives[2]
    assert phone.skip_count == 3

    assert queue.select_next_to_cook() is phone
    assert drives[3].status == Status.PLACED
    assert queue.select_next_to_cook() is drives[3]


def test_skip_count_ages_phone_orders_past_placed(queue, place):
    phone = place(PHONE, "Ph")
    queue.select_next_to_cook()
    place(DT, "Dt")

    queue.select_next_to_cook()

    assert phone.status == Status.COOKING
    assert phone.skip_count == 1


def test_finished_doordash_order_keeps_aging_to_cap(queue, place):
    doordash = place(DOORDASH, "Dd")
    queue.select_next_to_cook()
    queue.complete_current_order()
    drives = [place(DT, f"D{idx}") for idx in range(4)]

    for _ in drives:
        queue.select_next_to_cook()

    assert doordash.status == Status.COMPLETE
    assert doordash.skip_count == 3
    assert all(order.status == Status.COOKING for order in drives)


def test_drive_through_then_phone_scenario(queue, catalog):
    al = queue.place_order(DT, "Al", [catalog.item(0), catalog.item(6)])
    bo = queue.place_order(PHONE, "Bo", [catalog.item(9)])

    assert queue.select_next_to_cook() is al
    assert al.status == Status.COOKING
    assert bo.skip_count == 0

    assert queue.select_next_to_cook() is bo
    assert bo.status == Status.COOKING

    assert queue.select_next_to_cook() is None


def test_current_order_is_not_reselected(catalog):
    first = Order.create(1, "Al", DT, [catalog.item(0)])
    second = Order.create(2, "Bo", DT, [catalog.item(0)])
    queue = OrderQueue.restore([first, second], next_id=2, current_index=0)

    assert queue.select_next_to_cook() is second


def test_only_order_can_be_reselected(catalog):
    only = Order.create(1, "Al", DT, [catalog.item(0)])
    queue = OrderQueue.restore([only], next_id=1, current_index=0)

    assert queue.select_next_to_cook() is only


def test_current_order_requires_selection(queue, place):
    place(DT, "Al")
    with pytest.raises(NoCurrentOrderError):
        queue.current_order()
    with pytest.raises(NoCurrentOrderError):
        queue.complete_current_order()


def test_complete_current_order(queue, place):
    order = place(DT, "Al")
    queue.select_next_to_cook()

    assert queue.current_order() is order
    assert queue.complete_current_order() is order
    assert order.status == Status.COMPLETE

    with pytest.raises(CurrentOrderStateError):
        queue.complete_current_order()
    with pytest.raises(OrderStateError):
        queue.complete_current_order()


def test_mark_ready_for_pickup_needs_complete_order(queue, place):
    order = place(PHONE, "Bo")
    with pytest.raises(OrderNotFoundError):
        queue.mark_ready_for_pickup(order.order_id)

    queue.select_next_to_cook()
    queue.complete_current_order()
    queue.mark_ready_for_pickup(order.order_id)

    assert order.status == Status.READY_FOR_PICKUP
    with pytest.raises(OrderNotFoundError):
        queue.mark_ready_for_pickup(order.order_id)
    with pytest.raises(OrderNotFoundError):
        queue.mark_ready_for_pickup(99)


def test_pickup_waiting_excludes_drive_through(queue, place):
    orders = [place(channel, f"N{int(channel)}") for channel in (DT, ONSITE, PHONE, DOORDASH)]
    for order in orders:
        order.status = Status.READY_FOR_PICKUP

    assert queue.pickup_waiting() == orders[1:]


def test_cancel_removes_only_placed_orders(queue, place):
    cooking = place(DT, "Al")
    waiting = place(ONSITE, "Bo")
    queue.select_next_to_cook()

    with pytest.raises(OrderNotFoundError):
        queue.cancel_order(cooking.order_id)
    with pytest.raises(OrderNotFoundError):
        queue.cancel_order(42)

    assert queue.cancel_order(waiting.order_id) is waiting
    assert queue.orders == [cooking]


def test_cancel_leaves_siblings_untouched(queue, place):
    first = place(PHONE, "Al")
    second = place(PHONE, "Bo")
    first.skip_count = 2
    second.skip_count = 1

    queue.cancel_order(first.order_id)

    assert queue.orders == [second]
    assert second.order_id == 2
    assert second.skip_count == 1


def test_cancel_keeps_current_order_reference(queue, place):
    phone = place(PHONE, "Al")
    drive = place(DT, "Bo")
    queue.select_next_to_cook()
    assert queue.current_index == 1

    queue.cancel_order(phone.order_id)

    assert queue.current_index == 0
    assert queue.current_order() is drive


def test_listing_helpers(queue, place):
    placed = place(PHONE, "Al")
    done = place(DT, "Bo")
    queue.select_next_to_cook()
    queue.complete_current_order()

    assert queue.placed_orders() == [placed]
    assert queue.completed_orders() == [done]
    assert queue.orders_with(Status.PLACED, [DT]) == []
