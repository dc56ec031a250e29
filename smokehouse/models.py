"""
SQLAlchemy Database Models

Menu items, carts and orders are stored document-style: one row per entity,
with cart lines and order lines kept in JSON columns rather than child
tables. A cart is always read and written as a whole.
"""

from sqlalchemy import Column, String, Float, DateTime, Text, Enum, Boolean, JSON

from smokehouse.database import Base
from smokehouse.schemas import (
    Cart,
    CartItem,
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
)


def _enum_values(enum_cls) -> list[str]:
    """Store enum values ("smokedMeats") rather than member names."""
    return [member.value for member in enum_cls]


class MenuItemRecord(Base):
    """Catalog entry."""
    __tablename__ = "menu_items"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    serving = Column(String(255), nullable=False, default="")
    price = Column(Float, nullable=False)
    category = Column(
        Enum(MenuCategory, name="menu_category", native_enum=False, values_callable=_enum_values),
        nullable=False,
        index=True
    )
    popular = Column(Boolean, default=False, nullable=False)
    spicy = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False, index=True)
    image = Column(String(500), default="", nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_entity(cls, item: MenuItem) -> "MenuItemRecord":
        return cls(**item.model_dump())

    def to_entity(self) -> MenuItem:
        return MenuItem(
            id=self.id,
            name=self.name,
            description=self.description,
            serving=self.serving,
            price=self.price,
            category=self.category,
            popular=self.popular,
            spicy=self.spicy,
            active=self.active,
            image=self.image,
            created_at=self.created_at,
        )

    def __repr__(self):
        return f"<MenuItem {self.id} - {self.name} - {self.price}>"


class CartRecord(Base):
    """
    Session cart keyed by the client-supplied session id.

    subtotal/tax/total are stored for convenience only; the cart service
    recomputes them from ``items`` whenever a cart is loaded.
    """
    __tablename__ = "carts"

    session_id = Column(String(255), primary_key=True)
    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)
    last_updated = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_entity(cls, cart: Cart) -> "CartRecord":
        return cls(
            session_id=cart.session_id,
            items=[item.model_dump(mode="json") for item in cart.items],
            subtotal=cart.subtotal,
            tax=cart.tax,
            total=cart.total,
            last_updated=cart.last_updated,
        )

    def to_entity(self) -> Cart:
        return Cart(
            session_id=self.session_id,
            items=[CartItem.model_validate(item) for item in self.items or []],
            subtotal=self.subtotal,
            tax=self.tax,
            total=self.total,
            last_updated=self.last_updated,
        )

    def __repr__(self):
        return f"<Cart {self.session_id} - {len(self.items or [])} lines>"


class OrderRecord(Base):
    """Placed order with its priced line snapshot."""
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    order_number = Column(String(64), nullable=False, unique=True, index=True)
    items = Column(JSON, nullable=False)
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    customer_info = Column(JSON, nullable=True)
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderRecord":
        return cls(
            id=order.id,
            order_number=order.order_number,
            items=[item.model_dump(mode="json") for item in order.items],
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
            customer_info=order.customer_info,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def to_entity(self) -> Order:
        return Order(
            id=self.id,
            order_number=self.order_number,
            items=[OrderItem.model_validate(item) for item in self.items],
            subtotal=self.subtotal,
            tax=self.tax,
            total=self.total,
            customer_info=self.customer_info,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self):
        return f"<Order {self.order_number} - {self.status.value}>"
