"""Tests for the seed menu loader."""
from __future__ import annotations

import pytest

from smokehouse.schemas import MenuCategory
from smokehouse.seed import SEED_MENU, seed_menu


@pytest.mark.asyncio
async def test_seed_populates_empty_catalog(store):
    items = await seed_menu(store)

    assert len(items) == len(SEED_MENU) == 11
    assert await store.count_menu_items() == 11
    sides = await store.list_menu_items(category=MenuCategory.SIDES)
    assert [i.name for i in sides] == [
        "BBQ Baked Beans", "Collard Greens", "Cornbread", "Smoked Mac & Cheese"
    ]


@pytest.mark.asyncio
async def test_seed_skips_populated_catalog(store, catalog):
    assert await seed_menu(store) == []
    assert await store.count_menu_items() == 3


@pytest.mark.asyncio
async def test_seed_reset_replaces_catalog(store, catalog):
    await seed_menu(store, reset=True)

    assert await store.count_menu_items() == 11
    assert await store.find_menu_item("A") is None
