"""
In-Memory Store Implementation

Keeps menu items, carts and orders in dictionaries. Used for local
development without PostgreSQL (STORE_BACKEND=memory) and as the fake
store in tests.

Entities are deep-copied on the way in and out so callers never share
mutable state with the store, matching what a real database round trip
would give them.
"""

import logging
from datetime import datetime
from typing import Optional

from smokehouse.schemas import Cart, MenuCategory, MenuItem, Order, OrderStatus
from smokehouse.services.store.base import BaseStore

logger = logging.getLogger(__name__)


class MemoryStore(BaseStore):
    """
    Dictionary-backed implementation of the store.

    Example:
        >>> store = MemoryStore()
        >>> await store.connect()
        >>> await store.save_cart(Cart(session_id="sess-1"))
        >>> (await store.find_cart("sess-1")).items
        []
    """

    def __init__(self):
        self._menu_items: dict[str, MenuItem] = {}
        self._carts: dict[str, Cart] = {}
        self._orders: dict[str, Order] = {}

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "memory"

    async def connect(self) -> None:
        logger.info("MemoryStore ready (data is not persisted across restarts)")

    async def close(self) -> None:
        pass

    async def health_check(self) -> bool:
        return True

    # =========================================================================
    # CATALOG
    # =========================================================================

    async def find_menu_item(self, item_id: str) -> Optional[MenuItem]:
        item = self._menu_items.get(item_id)
        return item.model_copy(deep=True) if item else None

    async def list_menu_items(
        self,
        category: Optional[MenuCategory] = None,
        active_only: bool = True,
    ) -> list[MenuItem]:
        items = [
            item for item in self._menu_items.values()
            if (not active_only or item.active)
            and (category is None or item.category == category)
        ]
        items.sort(key=lambda item: (item.category.value, item.name))
        return [item.model_copy(deep=True) for item in items]

    async def save_menu_item(self, item: MenuItem) -> MenuItem:
        self._menu_items[item.id] = item.model_copy(deep=True)
        return item

    async def delete_menu_item(self, item_id: str) -> bool:
        return self._menu_items.pop(item_id, None) is not None

    async def delete_all_menu_items(self) -> int:
        count = len(self._menu_items)
        self._menu_items.clear()
        return count

    async def count_menu_items(self) -> int:
        return len(self._menu_items)

    # =========================================================================
    # CARTS
    # =========================================================================

    async def find_cart(self, session_id: str) -> Optional[Cart]:
        cart = self._carts.get(session_id)
        return cart.model_copy(deep=True) if cart else None

    async def save_cart(self, cart: Cart) -> Cart:
        self._carts[cart.session_id] = cart.model_copy(deep=True)
        return cart

    async def delete_carts(self) -> int:
        count = len(self._carts)
        self._carts.clear()
        return count

    async def count_carts(self) -> int:
        return len(self._carts)

    # =========================================================================
    # ORDERS
    # =========================================================================

    async def find_order(self, order_id: str) -> Optional[Order]:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Order]:
        orders = [
            order for order in self._orders.values()
            if (status is None or order.status == status)
            and (start is None or order.created_at >= start)
            and (end is None or order.created_at <= end)
        ]
        orders.sort(key=lambda order: order.created_at, reverse=True)
        return [order.model_copy(deep=True) for order in orders]

    async def save_order(self, order: Order) -> Order:
        self._orders[order.id] = order.model_copy(deep=True)
        return order

    async def count_orders(self) -> int:
        return len(self._orders)
