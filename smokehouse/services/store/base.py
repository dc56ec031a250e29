"""
Store Abstract Base Class

Defines the persistence contract used by the cart, order and menu services.
Both MemoryStore and SQLStore implement these methods, so the services work
identically regardless of which backend is active.

The contract is document-shaped: whole entities are looked up by primary key
or equality filters and saved back as a whole (upsert). There is no partial
field update and no optimistic concurrency check, so concurrent writes to the
same cart are last-writer-wins.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from smokehouse.schemas import Cart, MenuCategory, MenuItem, Order, OrderStatus


class BaseStore(ABC):
    """
    Abstract base class for persistence backends.

    Implementations raise ``CollaboratorUnavailable`` when the underlying
    database cannot be reached; they never return partial results.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the backend.

        Returns:
            str: Backend name (e.g., "memory", "postgresql")
        """
        pass

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Prepare the backend (create tables, verify connectivity).

        Raises:
            CollaboratorUnavailable: If the backend is unreachable
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the backend."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the backend.

        Returns:
            bool: True if the backend is reachable
        """
        pass

    # =========================================================================
    # CATALOG
    # =========================================================================

    @abstractmethod
    async def find_menu_item(self, item_id: str) -> Optional[MenuItem]:
        """Look up a menu item by id, active or not."""
        pass

    @abstractmethod
    async def list_menu_items(
        self,
        category: Optional[MenuCategory] = None,
        active_only: bool = True,
    ) -> list[MenuItem]:
        """
        List menu items sorted by category, then name.

        Args:
            category: Only return items of this category
            active_only: Skip items whose ``active`` flag is false
        """
        pass

    @abstractmethod
    async def save_menu_item(self, item: MenuItem) -> MenuItem:
        pass

    @abstractmethod
    async def delete_menu_item(self, item_id: str) -> bool:
        """Delete a menu item. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def delete_all_menu_items(self) -> int:
        pass

    @abstractmethod
    async def count_menu_items(self) -> int:
        pass

    # =========================================================================
    # CARTS
    # =========================================================================

    @abstractmethod
    async def find_cart(self, session_id: str) -> Optional[Cart]:
        pass

    @abstractmethod
    async def save_cart(self, cart: Cart) -> Cart:
        """Insert or replace the cart keyed by its session id."""
        pass

    @abstractmethod
    async def delete_carts(self) -> int:
        """Delete every cart. Returns the number deleted."""
        pass

    @abstractmethod
    async def count_carts(self) -> int:
        pass

    # =========================================================================
    # ORDERS
    # =========================================================================

    @abstractmethod
    async def find_order(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Order]:
        """
        List orders newest first.

        Args:
            status: Only orders in this status
            start: Inclusive lower bound on ``created_at``
            end: Inclusive upper bound on ``created_at``
        """
        pass

    @abstractmethod
    async def save_order(self, order: Order) -> Order:
        """Insert or replace the order keyed by its id."""
        pass

    @abstractmethod
    async def count_orders(self) -> int:
        pass
