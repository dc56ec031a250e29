"""Shared pytest fixtures."""
from __future__ import annotations

import os

# Must be set before smokehouse.main is imported (settings are cached)
os.environ["STORE_BACKEND"] = "memory"
os.environ["ENV_MODE"] = "development"
os.environ["TAX_RATE"] = "0.02"
os.environ["SEED_MENU_ON_STARTUP"] = "false"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from smokehouse.core.config import get_settings

get_settings.cache_clear()

from smokehouse.main import create_app
from smokehouse.schemas import MenuCategory, MenuItem
from smokehouse.services.store import MemoryStore


def make_menu_item(item_id: str, price: float, **overrides) -> MenuItem:
    data = {
        "id": item_id,
        "name": f"Item {item_id}",
        "description": "Test item",
        "serving": "Regular portion",
        "price": price,
        "category": MenuCategory.SMOKED_MEATS,
    }
    data.update(overrides)
    return MenuItem(**data)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture()
async def catalog(store: MemoryStore) -> dict[str, MenuItem]:
    """Store with three menu items: A (10.00), B (4.99) and inactive C (3.50)."""
    items = {
        "A": make_menu_item("A", 10.00, name="Texas Brisket"),
        "B": make_menu_item("B", 4.99, name="Cornbread", category=MenuCategory.SIDES),
        "C": make_menu_item(
            "C", 3.50, name="Seasonal Slaw", category=MenuCategory.SIDES, active=False
        ),
    }
    for item in items.values():
        await store.save_menu_item(item)
    return items


@pytest.fixture()
def client(store: MemoryStore):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def menu_ids(client: TestClient) -> dict[str, str]:
    """Create menu items through the admin API and return their ids by name."""
    payloads = [
        {"name": "Texas Brisket", "description": "Slow-smoked", "serving": "12 oz",
         "price": 10.00, "category": "smokedMeats", "popular": True},
        {"name": "Cornbread", "description": "Honey butter", "serving": "Two pieces",
         "price": 4.99, "category": "sides"},
        {"name": "BBQ Chicken Sandwich", "description": "Spicy sauce", "serving": "Brioche bun",
         "price": 11.99, "category": "sandwiches", "spicy": True},
        {"name": "Seasonal Slaw", "description": "Retired", "serving": "Cup",
         "price": 3.50, "category": "sides", "active": False},
    ]
    ids = {}
    for payload in payloads:
        response = client.post("/api/menu", json=payload)
        assert response.status_code == 201
        ids[payload["name"]] = response.json()["id"]
    return ids
