"""Tests for the session cart engine."""
from __future__ import annotations

import pytest

from smokehouse.core.exceptions import InvalidArgument, NotFound
from smokehouse.schemas import Cart, CartItem
from smokehouse.services.cart import CartService, validate_quantity


@pytest.mark.asyncio
async def test_get_or_create_persists_empty_cart(store, catalog):
    service = CartService(store)

    cart = await service.get_or_create("sess1")

    assert cart.items == []
    assert (cart.subtotal, cart.tax, cart.total) == (0.0, 0.0, 0.0)
    assert await store.find_cart("sess1") is not None


@pytest.mark.asyncio
async def test_get_or_create_returns_existing_cart(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 1)

    cart = await service.get_or_create("sess1")

    assert len(cart.items) == 1
    assert await store.count_carts() == 1


@pytest.mark.asyncio
async def test_adding_same_item_merges_quantities(store, catalog):
    service = CartService(store)

    cart = await service.add_item("sess1", "A", 2)
    assert cart.subtotal == 20.00
    assert cart.tax == 0.40
    assert cart.total == pytest.approx(20.40)

    cart = await service.add_item("sess1", "A", 1)
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3
    assert cart.subtotal == 30.00
    assert cart.tax == 0.60
    assert cart.total == pytest.approx(30.60)


@pytest.mark.asyncio
async def test_add_item_snapshots_name_and_price(store, catalog):
    service = CartService(store)
    cart = await service.add_item("sess1", "B")

    line = cart.items[0]
    assert line.menu_item_id == "B"
    assert line.name == "Cornbread"
    assert line.price == 4.99
    assert line.quantity == 1
    assert line.id and line.id != "B"


@pytest.mark.asyncio
async def test_catalog_price_change_does_not_reprice_cart(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 2)

    await store.save_menu_item(catalog["A"].model_copy(update={"price": 15.00}))
    cart = await service.get_or_create("sess1")

    assert cart.items[0].price == 10.00
    assert cart.subtotal == 20.00


@pytest.mark.asyncio
async def test_inactive_item_can_still_be_added(store, catalog):
    cart = await CartService(store).add_item("sess1", "C", 1)
    assert cart.items[0].menu_item_id == "C"


@pytest.mark.asyncio
async def test_add_unknown_item_raises_not_found(store, catalog):
    with pytest.raises(NotFound):
        await CartService(store).add_item("sess1", "missing", 1)
    assert await store.find_cart("sess1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True])
async def test_add_rejects_non_positive_or_non_integer_quantity(store, catalog, quantity):
    with pytest.raises(InvalidArgument):
        await CartService(store).add_item("sess1", "A", quantity)


@pytest.mark.asyncio
async def test_update_quantity_by_line_id(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 1)
    cart = await service.add_item("sess1", "B", 1)
    line_id = cart.items[1].id

    cart = await service.update_quantity("sess1", line_id, 4)

    assert cart.items[1].quantity == 4
    assert cart.subtotal == pytest.approx(29.96)
    assert cart.total == pytest.approx(cart.subtotal + cart.tax)
    stored = await store.find_cart("sess1")
    assert stored.items[1].quantity == 4


@pytest.mark.asyncio
async def test_update_quantity_does_not_match_catalog_id(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 1)

    with pytest.raises(NotFound):
        await service.update_quantity("sess1", "A", 2)


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [None, 0, -3])
async def test_update_quantity_rejects_invalid_quantity(store, catalog, quantity):
    service = CartService(store)
    cart = await service.add_item("sess1", "A", 1)

    with pytest.raises(InvalidArgument):
        await service.update_quantity("sess1", cart.items[0].id, quantity)


@pytest.mark.asyncio
async def test_update_quantity_without_cart_raises_not_found(store, catalog):
    with pytest.raises(NotFound):
        await CartService(store).update_quantity("nobody", "line", 2)


@pytest.mark.asyncio
async def test_removing_only_line_zeroes_totals(store, catalog):
    service = CartService(store)
    cart = await service.add_item("sess1", "A", 2)

    cart = await service.remove_item("sess1", cart.items[0].id)

    assert cart.items == []
    assert (cart.subtotal, cart.tax, cart.total) == (0.0, 0.0, 0.0)


@pytest.mark.asyncio
async def test_remove_missing_line_names_the_id(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 1)

    with pytest.raises(NotFound) as excinfo:
        await service.remove_item("sess1", "no-such-line")

    assert "no-such-line" in excinfo.value.detail


@pytest.mark.asyncio
async def test_remove_without_cart_raises_not_found(store, catalog):
    with pytest.raises(NotFound):
        await CartService(store).remove_item("nobody", "line")


@pytest.mark.asyncio
async def test_readding_after_removal_creates_new_line(store, catalog):
    service = CartService(store)
    first = (await service.add_item("sess1", "A", 1)).items[0].id
    await service.remove_item("sess1", first)

    cart = await service.add_item("sess1", "A", 1)

    assert cart.items[0].id != first


@pytest.mark.asyncio
async def test_clear_empties_cart_but_keeps_it(store, catalog):
    service = CartService(store)
    await service.add_item("sess1", "A", 2)
    await service.add_item("sess1", "B", 1)

    cart = await service.clear("sess1")

    assert cart.items == []
    assert (cart.subtotal, cart.tax, cart.total) == (0.0, 0.0, 0.0)
    assert await store.count_carts() == 1
    again = await service.get_or_create("sess1")
    assert again.items == []


@pytest.mark.asyncio
async def test_clear_without_cart_raises_not_found(store, catalog):
    with pytest.raises(NotFound):
        await CartService(store).clear("nobody")


@pytest.mark.asyncio
async def test_read_recomputes_stale_stored_totals(store, catalog):
    await store.save_cart(
        Cart(
            session_id="stale",
            items=[CartItem(id="l1", menu_item_id="A", name="Texas Brisket", price=10.00, quantity=3)],
            subtotal=999.0,
            tax=1.0,
            total=0.0,
        )
    )

    cart = await CartService(store).get_or_create("stale")

    assert cart.subtotal == 30.00
    assert cart.tax == 0.60
    assert cart.total == pytest.approx(30.60)


def test_validate_quantity_accepts_positive_int() -> None:
    assert validate_quantity(7) == 7
