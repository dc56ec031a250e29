"""
                        Services Module

Business logic behind the HTTP routes. Every service takes the store it
works against as a constructor argument.

Services:
    - cart: Session cart engine (merge, quantities, derived totals)
    - orders: Order placement, lookup and status updates
    - menu: Grouped menu listing and admin CRUD
    - pricing: Subtotal/tax/total rule shared by carts and orders
    - store: Persistence backends (memory, PostgreSQL)
"""

from smokehouse.services.cart import CartService
from smokehouse.services.menu import MenuService
from smokehouse.services.orders import OrderService

__all__ = ["CartService", "MenuService", "OrderService"]
