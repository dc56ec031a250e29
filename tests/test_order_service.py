"""Tests for order placement and status management."""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

from smokehouse.core.exceptions import InvalidArgument, NotFound
from smokehouse.schemas import Order, OrderItem, OrderStatus
from smokehouse.services.orders import OrderService, generate_order_number


def make_order(order_id: str, created_at: datetime, status=OrderStatus.PENDING) -> Order:
    return Order(
        id=order_id,
        order_number=f"ORD-{order_id}",
        items=[OrderItem(menu_item_id="A", name="Texas Brisket", price=10.0, quantity=1)],
        subtotal=10.0,
        tax=0.2,
        total=10.2,
        status=status,
        created_at=created_at,
    )


@pytest.mark.asyncio
async def test_place_order_prices_items_and_starts_pending(store, catalog):
    order = await OrderService(store).place_order(
        [{"menuItemId": "A", "quantity": 2}], {"name": "Jane Doe"}
    )

    assert order.subtotal == 20.00
    assert order.tax == 0.40
    assert order.total == pytest.approx(20.40)
    assert order.status == OrderStatus.PENDING
    assert order.customer_info == {"name": "Jane Doe"}
    assert order.items[0].name == "Texas Brisket"
    assert await store.find_order(order.id) is not None


@pytest.mark.asyncio
async def test_order_totals_survive_catalog_price_change(store, catalog):
    service = OrderService(store)
    order = await service.place_order([{"menuItemId": "A", "quantity": 2}])

    await store.save_menu_item(catalog["A"].model_copy(update={"price": 15.00}))
    stored = await service.get_order(order.id)

    assert stored.total == pytest.approx(20.40)
    assert stored.items[0].price == 10.00


@pytest.mark.asyncio
async def test_place_order_is_all_or_nothing(store, catalog):
    with pytest.raises(NotFound) as excinfo:
        await OrderService(store).place_order(
            [{"menuItemId": "A", "quantity": 2}, {"menuItemId": "invalidId", "quantity": 1}]
        )

    assert excinfo.value.detail == "invalidId"
    assert "invalidId" in excinfo.value.message
    assert await store.count_orders() == 0


@pytest.mark.asyncio
async def test_place_order_accepts_inactive_items(store, catalog):
    order = await OrderService(store).place_order([{"menuItemId": "C"}])
    assert order.items[0].quantity == 1
    assert order.subtotal == 3.50


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "items",
    [
        [],
        None,
        "A",
        [{"quantity": 2}],
        [{"menuItemId": "A", "quantity": 0}],
        [{"menuItemId": "A", "quantity": "lots"}],
        ["A"],
    ],
)
async def test_place_order_rejects_empty_or_malformed_items(store, catalog, items):
    with pytest.raises(InvalidArgument):
        await OrderService(store).place_order(items)
    assert await store.count_orders() == 0


def test_order_number_format() -> None:
    number = generate_order_number("ORD")
    assert re.fullmatch(r"ORD-\d{13}-\d{1,3}", number)


@pytest.mark.asyncio
async def test_place_order_uses_configured_prefix_and_tax_rate(store, catalog):
    service = OrderService(store, tax_rate=0.10, order_number_prefix="SMK")

    order = await service.place_order([{"menuItemId": "B", "quantity": 3}])

    assert re.fullmatch(r"SMK-\d{13}-\d{1,3}", order.order_number)
    assert (order.subtotal, order.tax, order.total) == (14.97, 1.5, 16.47)


@pytest.mark.asyncio
async def test_update_status_overwrites_any_status(store, catalog):
    service = OrderService(store)
    order = await service.place_order([{"menuItemId": "A"}])

    completed = await service.update_status(order.id, "completed")
    assert completed.status == OrderStatus.COMPLETED

    reopened = await service.update_status(order.id, "pending")
    assert reopened.status == OrderStatus.PENDING
    assert reopened.updated_at is not None


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(store, catalog):
    service = OrderService(store)
    order = await service.place_order([{"menuItemId": "A"}])

    with pytest.raises(InvalidArgument):
        await service.update_status(order.id, "not-a-status")

    assert (await service.get_order(order.id)).status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_update_status_of_missing_order(store, catalog):
    with pytest.raises(NotFound):
        await OrderService(store).update_status("missing", "ready")


@pytest.mark.asyncio
async def test_list_orders_newest_first_with_filters(store):
    base = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    await store.save_order(make_order("o1", base))
    await store.save_order(make_order("o2", base + timedelta(days=1), OrderStatus.READY))
    await store.save_order(make_order("o3", base + timedelta(days=2)))
    service = OrderService(store)

    assert [o.id for o in await service.list_orders()] == ["o3", "o2", "o1"]
    assert [o.id for o in await service.list_orders(status="ready")] == ["o2"]

    bounded = await service.list_orders(
        start_date=base + timedelta(days=1), end_date=base + timedelta(days=2)
    )
    assert [o.id for o in bounded] == ["o3", "o2"]

    naive_start = datetime(2026, 3, 2, 12, 0)
    assert [o.id for o in await service.list_orders(start_date=naive_start)] == ["o3", "o2"]


@pytest.mark.asyncio
async def test_list_orders_rejects_unknown_status(store):
    with pytest.raises(InvalidArgument):
        await OrderService(store).list_orders(status="lost")
