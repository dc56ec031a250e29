"""
Menu Seeding Script

Loads the starter menu into the configured store.
Run from project root: python scripts/seed.py [--reset]
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from smokehouse.core.config import get_settings, setup_logging
from smokehouse.core.exceptions import CollaboratorUnavailable
from smokehouse.seed import seed_menu
from smokehouse.services.store import create_store


async def main(reset: bool) -> int:
    settings = get_settings()
    store = create_store(settings)

    try:
        await store.connect()
    except CollaboratorUnavailable as e:
        print(f"❌ Could not connect to store: {e.detail or e.message}")
        return 1

    try:
        items = await seed_menu(store, reset=reset)
        if not items:
            print("ℹ️  Menu already has items. Use --reset to replace them.")
            return 0

        print(f"✅ Inserted {len(items)} menu items")
        print("\nMenu Items:")
        for item in items:
            print(f"- {item.name}: ${item.price} ({item.category.value})")
        return 0
    finally:
        await store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the restaurant menu")
    parser.add_argument("--reset", action="store_true", help="Delete existing menu items first")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(main(args.reset)))
