"""
Cart Service

Owns the session cart: one cart per client-supplied session id, created on
first access. Line items snapshot the menu item's name and price when they
are added, so later menu price changes do not alter an existing cart.

Lines are selected by their line-local ``id`` (``cart.items[].id``) in
update and remove calls. Catalog ids are only used when adding, where a
second add of the same menu item increases the existing line's quantity.

subtotal/tax/total are recomputed as the last step of every mutation and on
every read; whatever the store holds for them is never trusted.
"""

import logging
import uuid
from typing import Any, Optional

from smokehouse.core.exceptions import InvalidArgument, NotFound
from smokehouse.schemas import Cart, CartItem, utc_now
from smokehouse.services.pricing import Totals, calculate_totals
from smokehouse.services.store.base import BaseStore

logger = logging.getLogger(__name__)


def validate_quantity(quantity: Any) -> int:
    """
    Check that ``quantity`` is a positive integer.

    Raises:
        InvalidArgument: For missing, non-integer or < 1 values
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidArgument(
            "Quantity must be at least 1",
            detail=f"Received quantity {quantity!r}",
        )
    return quantity


class CartService:
    """
    Cart operations for a store.

    Attributes:
        store: Persistence backend
        tax_rate: Override for the configured tax rate

    Example:
        >>> service = CartService(store)
        >>> cart = await service.add_item("sess-1", brisket_id, quantity=2)
        >>> cart.total
        50.98
    """

    def __init__(self, store: BaseStore, tax_rate: Optional[float] = None):
        self.store = store
        self.tax_rate = tax_rate

    def recalculate(self, cart: Cart) -> Cart:
        """Recompute the derived totals of ``cart`` in place."""
        totals = calculate_totals(cart.items, self.tax_rate) if cart.items else Totals.zero()
        cart.subtotal = totals.subtotal
        cart.tax = totals.tax
        cart.total = totals.total
        return cart

    async def _save(self, cart: Cart) -> Cart:
        self.recalculate(cart)
        cart.last_updated = utc_now()
        await self.store.save_cart(cart)
        return cart

    async def _require_cart(self, session_id: str) -> Cart:
        cart = await self.store.find_cart(session_id)
        if cart is None:
            raise NotFound("Cart not found", detail=f"No cart for session {session_id}")
        return cart

    @staticmethod
    def _line_index(cart: Cart, line_id: str) -> int:
        for index, line in enumerate(cart.items):
            if line.id == line_id:
                return index
        raise NotFound(
            "Item not found in cart",
            detail=f"Item with id {line_id} not found",
        )

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def get_or_create(self, session_id: str) -> Cart:
        """Return the session's cart, creating and saving an empty one if needed."""
        cart = await self.store.find_cart(session_id)
        if cart is None:
            logger.info(f"Creating cart for session {session_id}")
            cart = Cart(session_id=session_id)
            await self.store.save_cart(cart)
        return self.recalculate(cart)

    async def add_item(
        self,
        session_id: str,
        menu_item_id: str,
        quantity: Optional[int] = None,
    ) -> Cart:
        """
        Add a menu item to the cart.

        Args:
            session_id: Cart owner
            menu_item_id: Catalog id; inactive items are accepted
            quantity: Positive integer, 1 when omitted

        Raises:
            InvalidArgument: If quantity is given but not a positive integer
            NotFound: If the menu item does not exist
        """
        quantity = 1 if quantity is None else validate_quantity(quantity)

        menu_item = await self.store.find_menu_item(menu_item_id)
        if menu_item is None:
            raise NotFound("Menu item not found", detail=f"Menu item {menu_item_id} not found")

        cart = await self.store.find_cart(session_id)
        if cart is None:
            cart = Cart(session_id=session_id)

        existing = next(
            (line for line in cart.items if line.menu_item_id == menu_item_id), None
        )
        if existing is not None:
            existing.quantity += quantity
        else:
            cart.items.append(
                CartItem(
                    id=uuid.uuid4().hex,
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=quantity,
                )
            )

        logger.info(f"Cart {session_id}: added {quantity} x {menu_item.name}")
        return await self._save(cart)

    async def update_quantity(self, session_id: str, line_id: str, quantity: Any) -> Cart:
        """
        Set the quantity of one cart line.

        Raises:
            InvalidArgument: If quantity is missing or < 1
            NotFound: If the cart or the line does not exist
        """
        quantity = validate_quantity(quantity)
        cart = await self._require_cart(session_id)

        line = cart.items[self._line_index(cart, line_id)]
        line.quantity = quantity

        logger.info(f"Cart {session_id}: line {line_id} quantity set to {quantity}")
        return await self._save(cart)

    async def remove_item(self, session_id: str, line_id: str) -> Cart:
        """
        Remove one cart line.

        Raises:
            NotFound: If the cart or the line does not exist; the detail
                names the line id that was searched for
        """
        cart = await self._require_cart(session_id)
        del cart.items[self._line_index(cart, line_id)]

        logger.info(f"Cart {session_id}: removed line {line_id}")
        return await self._save(cart)

    async def clear(self, session_id: str) -> Cart:
        """
        Empty the cart. The cart itself is kept.

        Raises:
            NotFound: If the session has no cart
        """
        cart = await self._require_cart(session_id)
        cart.items = []

        logger.info(f"Cart {session_id}: cleared")
        return await self._save(cart)
