"""
Order Service

Turns a client-proposed list of (menuItemId, quantity) pairs into a priced,
immutable order, and manages order status afterwards.

Placement is all-or-nothing: every menu item is resolved before anything is
written, and the first unknown id aborts the whole order.

Status workflow:
    pending → confirmed → preparing → ready → completed
    (cancelled at any point)

The workflow is a convention only. ``update_status`` accepts any status in
the closed set regardless of the current one.
"""

import logging
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from smokehouse.core.config import get_settings
from smokehouse.core.exceptions import InvalidArgument, NotFound
from smokehouse.schemas import (
    Order,
    OrderItem,
    OrderItemRequest,
    OrderStatus,
    utc_now,
)
from smokehouse.services.pricing import calculate_totals
from smokehouse.services.store.base import BaseStore

logger = logging.getLogger(__name__)

_order_items_adapter = TypeAdapter(list[OrderItemRequest])


def generate_order_number(prefix: Optional[str] = None) -> str:
    """
    Build a human-readable order number: ``<prefix>-<epoch ms>-<0..999>``.

    Not guaranteed unique, but two orders would have to land in the same
    millisecond and draw the same suffix to collide.
    """
    prefix = prefix or get_settings().order_number_prefix
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_status(status: Any) -> OrderStatus:
    """
    Convert a raw status value into ``OrderStatus``.

    Raises:
        InvalidArgument: If the value is not one of the known statuses
    """
    try:
        return OrderStatus(status)
    except ValueError:
        valid = [s.value for s in OrderStatus]
        raise InvalidArgument("Invalid status", detail=f"Status must be one of: {valid}")


def parse_order_items(items: Any) -> list[OrderItemRequest]:
    """
    Validate the raw ``items`` payload of an order request.

    Raises:
        InvalidArgument: If items is missing, empty or malformed
    """
    if not items or not isinstance(items, (list, tuple)):
        raise InvalidArgument("No items in order")
    try:
        return _order_items_adapter.validate_python(list(items))
    except ValidationError as e:
        raise InvalidArgument("Invalid order items", detail=str(e))


class OrderService:
    """
    Order placement, lookup and status management.

    Example:
        >>> service = OrderService(store)
        >>> order = await service.place_order(
        ...     [{"menuItemId": brisket_id, "quantity": 2}],
        ...     {"name": "Jane Doe"},
        ... )
        >>> order.status
        <OrderStatus.PENDING: 'pending'>
    """

    def __init__(
        self,
        store: BaseStore,
        tax_rate: Optional[float] = None,
        order_number_prefix: Optional[str] = None,
    ):
        self.store = store
        self.tax_rate = tax_rate
        self.order_number_prefix = order_number_prefix

    async def place_order(
        self,
        items: Sequence[Any],
        customer_info: Any = None,
    ) -> Order:
        """
        Price and persist a new order.

        Args:
            items: Sequence of ``{"menuItemId": ..., "quantity": ...}`` mappings
                (or OrderItemRequest objects)
            customer_info: Opaque customer payload, stored as given

        Raises:
            InvalidArgument: If items is empty or malformed
            NotFound: On the first menu item id that does not resolve
        """
        requested = parse_order_items(items)

        order_items = []
        for request in requested:
            menu_item = await self.store.find_menu_item(request.menu_item_id)
            if menu_item is None:
                raise NotFound(
                    f"Menu item {request.menu_item_id} not found",
                    detail=request.menu_item_id,
                )
            order_items.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=request.quantity,
                )
            )

        totals = calculate_totals(order_items, self.tax_rate)
        order = Order(
            id=uuid.uuid4().hex,
            order_number=generate_order_number(self.order_number_prefix),
            items=order_items,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            customer_info=customer_info,
            status=OrderStatus.PENDING,
        )
        await self.store.save_order(order)

        logger.info(
            f"Order {order.order_number} placed: {len(order_items)} lines, total {order.total:.2f}"
        )
        return order

    async def get_order(self, order_id: str) -> Order:
        """
        Raises:
            NotFound: If the order does not exist
        """
        order = await self.store.find_order(order_id)
        if order is None:
            raise NotFound("Order not found", detail=f"Order {order_id} not found")
        return order

    async def list_orders(
        self,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Order]:
        """
        List orders newest first, optionally filtered.

        Args:
            status: Only orders in this status
            start_date: Inclusive lower bound on creation time
            end_date: Inclusive upper bound on creation time

        Raises:
            InvalidArgument: If status is not a known status
        """
        status_filter = parse_status(status) if status else None
        return await self.store.list_orders(
            status_filter, _as_utc(start_date), _as_utc(end_date)
        )

    async def update_status(self, order_id: str, status: Any) -> Order:
        """
        Overwrite the status of an order.

        Raises:
            InvalidArgument: If status is outside the known set
            NotFound: If the order does not exist
        """
        new_status = parse_status(status)
        order = await self.get_order(order_id)

        previous = order.status
        order.status = new_status
        order.updated_at = utc_now()
        await self.store.save_order(order)

        logger.info(
            f"Order {order.order_number}: status {previous.value} → {new_status.value}"
        )
        return order
