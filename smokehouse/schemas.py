"""
Pydantic Schemas for Entities and Request/Response Validation

The storefront's JSON contract uses camelCase field names (``sessionId``,
``menuItemId``, ``lastUpdated``...). Every model here inherits
``CamelModel`` so Python code uses snake_case attributes while the wire
format keeps the camelCase names.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Timezone-aware current time; every stored timestamp uses UTC."""
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class MenuCategory(str, Enum):
    SMOKED_MEATS = "smokedMeats"
    SIDES = "sides"
    SANDWICHES = "sandwiches"


class OrderStatus(str, Enum):
    """Order status workflow. Any status may be set from any other."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# CATALOG
# =============================================================================

class MenuItem(CamelModel):
    """A sellable menu entry."""
    id: str
    name: str = Field(..., min_length=1, examples=["Texas Brisket"])
    description: str = ""
    serving: str = ""
    price: float = Field(..., ge=0, examples=[24.99])
    category: MenuCategory
    popular: bool = False
    spicy: bool = False
    active: bool = True
    image: str = ""
    created_at: datetime = Field(default_factory=utc_now)


class MenuItemCreate(CamelModel):
    """Request schema for creating a menu item (admin)."""
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    serving: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: MenuCategory
    popular: bool = False
    spicy: bool = False
    active: bool = True
    image: str = ""


class MenuItemUpdate(CamelModel):
    """Partial update for a menu item; unset fields are left untouched."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    serving: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[MenuCategory] = None
    popular: Optional[bool] = None
    spicy: Optional[bool] = None
    active: Optional[bool] = None
    image: Optional[str] = None


class GroupedMenu(CamelModel):
    """Active menu items bucketed into the three fixed categories."""
    smoked_meats: List[MenuItem] = Field(default_factory=list)
    sides: List[MenuItem] = Field(default_factory=list)
    sandwiches: List[MenuItem] = Field(default_factory=list)


# =============================================================================
# CART
# =============================================================================

class CartItem(CamelModel):
    """
    One line of a cart.

    ``id`` is the line-local identifier used to select the line in update
    and remove calls. ``name`` and ``price`` are copied from the menu item
    when the line is created and are not refreshed afterwards.
    """
    id: str
    menu_item_id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    added_at: datetime = Field(default_factory=utc_now)


class Cart(CamelModel):
    """Session cart. subtotal/tax/total are derived from ``items``."""
    session_id: str
    items: List[CartItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    last_updated: datetime = Field(default_factory=utc_now)


class AddCartItemRequest(CamelModel):
    menu_item_id: str = Field(..., min_length=1)
    quantity: Optional[int] = Field(None, examples=[2])


class UpdateCartItemRequest(CamelModel):
    quantity: Optional[int] = Field(None, examples=[3])


# =============================================================================
# ORDERS
# =============================================================================

class OrderItem(CamelModel):
    """Immutable priced snapshot of one ordered menu item."""
    menu_item_id: str
    name: str
    price: float
    quantity: int


class OrderItemRequest(CamelModel):
    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)


class Order(CamelModel):
    """A placed order. Totals are fixed when the order is created."""
    id: str
    order_number: str
    items: List[OrderItem]
    subtotal: float
    tax: float
    total: float
    customer_info: Optional[Any] = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None


class OrderCreate(CamelModel):
    """
    Request schema for placing an order.

    ``items`` is validated by the order service so that an empty or
    malformed list is reported the same way regardless of the caller.
    """
    items: Optional[List[Any]] = Field(None, examples=[[{"menuItemId": "a1b2", "quantity": 2}]])
    customer_info: Optional[Any] = Field(
        None, examples=[{"name": "Jane Doe", "phone": "555-123-4567"}]
    )


class OrderStatusUpdate(CamelModel):
    status: Optional[str] = Field(None, examples=["confirmed"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderCreateResponse(CamelModel):
    """Response after successfully placing an order."""
    success: bool
    order: Order
    message: str


class MessageResponse(CamelModel):
    message: str


class ResetResponse(CamelModel):
    """Response of the development cart reset endpoint."""
    success: bool
    message: str
    deleted_count: int


class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(CamelModel):
    """Health check response."""
    status: str
    mode: str
    store: str
    menu_items: int
    orders: int
    carts: int
    timestamp: datetime
