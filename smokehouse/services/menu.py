"""
Menu Service

Read side of the catalog for the storefront (active items grouped by
category) plus the administrative create/update/delete operations.

Only the grouped listing filters on ``active``. Looking up a single item by
id returns it whatever its flag, which is also how carts and orders resolve
menu items.
"""

import logging
import uuid
from typing import Optional

from pydantic import ValidationError

from smokehouse.core.exceptions import InvalidArgument, NotFound
from smokehouse.schemas import (
    GroupedMenu,
    MenuCategory,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
)
from smokehouse.services.store.base import BaseStore

logger = logging.getLogger(__name__)


class MenuService:
    """Catalog operations for a store."""

    def __init__(self, store: BaseStore):
        self.store = store

    async def grouped_menu(self, category: Optional[str] = None) -> GroupedMenu:
        """
        Active menu items grouped into the fixed categories.

        An unknown ``category`` matches nothing, so every group comes back
        empty rather than raising.
        """
        if category:
            try:
                category_filter = MenuCategory(category)
            except ValueError:
                logger.debug(f"Unknown menu category filter: {category}")
                return GroupedMenu()
            items = await self.store.list_menu_items(category=category_filter)
        else:
            items = await self.store.list_menu_items()

        return GroupedMenu(
            smoked_meats=[i for i in items if i.category == MenuCategory.SMOKED_MEATS],
            sides=[i for i in items if i.category == MenuCategory.SIDES],
            sandwiches=[i for i in items if i.category == MenuCategory.SANDWICHES],
        )

    async def get_item(self, item_id: str) -> MenuItem:
        item = await self.store.find_menu_item(item_id)
        if item is None:
            raise NotFound("Menu item not found", detail=f"Menu item {item_id} not found")
        return item

    async def create_item(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(id=uuid.uuid4().hex, **data.model_dump())
        await self.store.save_menu_item(item)
        logger.info(f"Menu item created: {item.name} ({item.id})")
        return item

    async def update_item(self, item_id: str, changes: MenuItemUpdate) -> MenuItem:
        """
        Apply a partial update.

        Raises:
            NotFound: If the item does not exist
            InvalidArgument: If the merged item breaks a field constraint
        """
        item = await self.get_item(item_id)
        merged = item.model_dump()
        merged.update(changes.model_dump(exclude_unset=True, exclude_none=True))

        try:
            updated = MenuItem.model_validate(merged)
        except ValidationError as e:
            raise InvalidArgument("Failed to update menu item", detail=str(e))

        await self.store.save_menu_item(updated)
        logger.info(f"Menu item updated: {updated.name} ({updated.id})")
        return updated

    async def delete_item(self, item_id: str) -> None:
        if not await self.store.delete_menu_item(item_id):
            raise NotFound("Menu item not found", detail=f"Menu item {item_id} not found")
        logger.info(f"Menu item deleted: {item_id}")
