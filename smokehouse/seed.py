"""
Seed Menu

Starter catalog for the smokehouse. Loaded at startup when
SEED_MENU_ON_STARTUP=true and the catalog is empty, or on demand with
``python scripts/seed.py``.
"""

import logging
import uuid

from smokehouse.schemas import MenuCategory, MenuItem
from smokehouse.services.store.base import BaseStore

logger = logging.getLogger(__name__)


SEED_MENU = [
    # Smoked Meats
    {
        "name": "Texas Brisket",
        "description": "Slow-smoked for 14 hours, served with our signature rub",
        "serving": "12 oz portion, served with two sides",
        "price": 24.99,
        "category": MenuCategory.SMOKED_MEATS,
        "popular": True,
    },
    {
        "name": "Pulled Pork",
        "description": "12-hour smoked pork shoulder, hand-pulled to perfection",
        "serving": "8 oz portion, served with two sides",
        "price": 18.99,
        "category": MenuCategory.SMOKED_MEATS,
    },
    {
        "name": "St. Louis Ribs",
        "description": "Fall-off-the-bone pork ribs with your choice of sauce",
        "serving": "Full rack (serves 2-3)",
        "price": 28.99,
        "category": MenuCategory.SMOKED_MEATS,
        "popular": True,
    },
    {
        "name": "Smoked Chicken",
        "description": "Whole chicken smoked with our special herb blend",
        "serving": "Half chicken, served with two sides",
        "price": 16.99,
        "category": MenuCategory.SMOKED_MEATS,
        "spicy": True,
    },
    # Sides
    {
        "name": "Smoked Mac & Cheese",
        "description": "Creamy blend of three cheeses with a smoky flavor",
        "serving": "Regular portion",
        "price": 5.99,
        "category": MenuCategory.SIDES,
    },
    {
        "name": "Collard Greens",
        "description": "Slow-cooked with smoked turkey",
        "serving": "Regular portion",
        "price": 4.99,
        "category": MenuCategory.SIDES,
    },
    {
        "name": "BBQ Baked Beans",
        "description": "Sweet and savory with chunks of brisket",
        "serving": "Regular portion",
        "price": 4.99,
        "category": MenuCategory.SIDES,
    },
    {
        "name": "Cornbread",
        "description": "Freshly baked with honey butter",
        "serving": "Two pieces",
        "price": 3.99,
        "category": MenuCategory.SIDES,
    },
    # Sandwiches
    {
        "name": "The Smokey Special",
        "description": "Brisket, pulled pork, and sausage with coleslaw",
        "serving": "Served on a brioche bun with fries",
        "price": 15.99,
        "category": MenuCategory.SANDWICHES,
        "popular": True,
    },
    {
        "name": "Pulled Pork Sandwich",
        "description": "Tender pulled pork with our signature sauce",
        "serving": "Served on a brioche bun with one side",
        "price": 12.99,
        "category": MenuCategory.SANDWICHES,
    },
    {
        "name": "BBQ Chicken Sandwich",
        "description": "Smoked chicken with spicy BBQ sauce",
        "serving": "Served on a brioche bun with one side",
        "price": 11.99,
        "category": MenuCategory.SANDWICHES,
        "spicy": True,
    },
]


async def seed_menu(store: BaseStore, reset: bool = False) -> list[MenuItem]:
    """
    Insert the seed menu.

    Args:
        store: Connected store
        reset: Delete every existing menu item first

    Returns:
        The inserted items; empty if the catalog already had items and
        ``reset`` was False
    """
    if reset:
        deleted = await store.delete_all_menu_items()
        logger.info(f"Cleared {deleted} existing menu items")
    elif await store.count_menu_items() > 0:
        logger.info("Menu already populated, skipping seed")
        return []

    items = [MenuItem(id=uuid.uuid4().hex, **data) for data in SEED_MENU]
    for item in items:
        await store.save_menu_item(item)

    logger.info(f"Inserted {len(items)} menu items")
    return items
