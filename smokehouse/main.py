"""
FastAPI Application Entry Point

Smokey Restaurant API - menu browsing, session carts and order tracking.

Endpoints:
    - GET /api/menu: Active menu grouped by category
    - GET/POST/PUT/DELETE /api/menu/{id}: Single menu item (admin writes)
    - GET /api/cart/{sessionId}: Get or create a session cart
    - POST /api/cart/{sessionId}/items: Add a menu item to the cart
    - PUT/DELETE /api/cart/{sessionId}/items/{itemId}: Change or remove a cart line
    - DELETE /api/cart/{sessionId}: Clear the cart
    - POST /api/orders: Place an order
    - GET /api/orders: List orders
    - GET /api/orders/{id}: Get an order
    - PATCH /api/orders/{id}/status: Update order status
    - GET /api/health: Store health and document counts

Run with:
    uvicorn smokehouse.main:app --port 3000
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smokehouse.core.config import Settings, get_settings, setup_logging
from smokehouse.core.exceptions import CollaboratorUnavailable, SmokehouseError
from smokehouse.schemas import (
    AddCartItemRequest,
    Cart,
    ErrorResponse,
    GroupedMenu,
    HealthResponse,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    MessageResponse,
    Order,
    OrderCreate,
    OrderCreateResponse,
    OrderStatusUpdate,
    ResetResponse,
    UpdateCartItemRequest,
    utc_now,
)
from smokehouse.seed import seed_menu
from smokehouse.services.cart import CartService
from smokehouse.services.menu import MenuService
from smokehouse.services.orders import OrderService
from smokehouse.services.store import BaseStore, create_store

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.

    The store must be reachable before the app accepts traffic; a
    connection failure here aborts startup.
    """
    app_settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {app_settings.app_name}")
    logger.info(f"   Version: {app_settings.app_version}")
    logger.info(f"   Environment: {app_settings.env_mode.value}")
    logger.info(f"   Debug: {app_settings.debug}")
    logger.info("=" * 60)

    if app.state.store is None:
        app.state.store = create_store(app_settings)
    store: BaseStore = app.state.store

    try:
        await store.connect()
    except CollaboratorUnavailable as e:
        logger.critical(f"❌ Store connection failed: {e.detail or e.message}")
        raise
    logger.info(f"✅ Store: {store.provider_name}")

    if app_settings.seed_menu_on_startup:
        seeded = await seed_menu(store)
        if seeded:
            logger.info(f"✅ Seeded {len(seeded)} menu items")

    logger.info(f"🌍 Allowed CORS origins: {app_settings.cors_origins_list}")
    logger.info("✅ Application ready!")

    yield  # Application runs

    logger.info("Shutting down...")
    await store.close()
    logger.info("✅ Cleanup complete")


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_store(request: Request) -> BaseStore:
    """Store owned by the running application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_cart_service(
    store: BaseStore = Depends(get_store),
    app_settings: Settings = Depends(get_app_settings),
) -> CartService:
    return CartService(store, tax_rate=app_settings.tax_rate)


def get_order_service(
    store: BaseStore = Depends(get_store),
    app_settings: Settings = Depends(get_app_settings),
) -> OrderService:
    return OrderService(
        store,
        tax_rate=app_settings.tax_rate,
        order_number_prefix=app_settings.order_number_prefix,
    )


def get_menu_service(store: BaseStore = Depends(get_store)) -> MenuService:
    return MenuService(store)


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

system_router = APIRouter()


@system_router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, Any]:
    """API root with endpoint overview."""
    app_settings: Settings = request.app.state.settings
    endpoints = {
        "menu": "GET /api/menu",
        "cart": "GET /api/cart/:sessionId",
        "order": "POST /api/orders",
        "health": "GET /api/health",
    }
    if not app_settings.is_production:
        endpoints["testReset"] = "GET /api/test/reset-carts"

    return {
        "message": app_settings.app_name,
        "version": app_settings.app_version,
        "mode": app_settings.env_mode.value,
        "endpoints": endpoints,
    }


@system_router.get(
    "/api/health",
    response_model=HealthResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    request: Request,
    store: BaseStore = Depends(get_store),
) -> Any:
    """Verify the store is reachable and report document counts."""
    app_settings: Settings = request.app.state.settings
    try:
        if not await store.health_check():
            raise CollaboratorUnavailable(
                "Store unavailable",
                detail=f"{store.provider_name} store did not respond",
            )
        menu_count = await store.count_menu_items()
        order_count = await store.count_orders()
        cart_count = await store.count_carts()
    except CollaboratorUnavailable as e:
        logger.error(f"Health check failed: {e.detail or e.message}")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "error": e.message,
                "mode": app_settings.env_mode.value,
            },
        )

    return HealthResponse(
        status="healthy",
        mode=app_settings.env_mode.value,
        store=store.provider_name,
        menu_items=menu_count,
        orders=order_count,
        carts=cart_count,
        timestamp=utc_now(),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

menu_router = APIRouter(prefix="/api/menu", tags=["Menu"])


@menu_router.get("", response_model=GroupedMenu, summary="Get Menu")
async def get_menu(
    category: Optional[str] = Query(None),
    menu: MenuService = Depends(get_menu_service),
) -> GroupedMenu:
    """Active menu items sorted by category and name, grouped by category."""
    return await menu.grouped_menu(category)


@menu_router.get("/{item_id}", response_model=MenuItem, responses=ERROR_RESPONSES)
async def get_menu_item(
    item_id: str,
    menu: MenuService = Depends(get_menu_service),
) -> MenuItem:
    return await menu.get_item(item_id)


@menu_router.post(
    "",
    response_model=MenuItem,
    status_code=201,
    responses=ERROR_RESPONSES,
    summary="Create Menu Item (Admin)",
)
async def create_menu_item(
    data: MenuItemCreate,
    menu: MenuService = Depends(get_menu_service),
) -> MenuItem:
    return await menu.create_item(data)


@menu_router.put(
    "/{item_id}",
    response_model=MenuItem,
    responses=ERROR_RESPONSES,
    summary="Update Menu Item (Admin)",
)
async def update_menu_item(
    item_id: str,
    changes: MenuItemUpdate,
    menu: MenuService = Depends(get_menu_service),
) -> MenuItem:
    return await menu.update_item(item_id, changes)


@menu_router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete Menu Item (Admin)",
)
async def delete_menu_item(
    item_id: str,
    menu: MenuService = Depends(get_menu_service),
) -> MessageResponse:
    await menu.delete_item(item_id)
    return MessageResponse(message="Menu item deleted successfully")


# =============================================================================
# CART ENDPOINTS
# =============================================================================

cart_router = APIRouter(prefix="/api/cart", tags=["Cart"])


@cart_router.get("/{session_id}", response_model=Cart, responses=ERROR_RESPONSES)
async def get_cart(
    session_id: str,
    carts: CartService = Depends(get_cart_service),
) -> Cart:
    """Get the session's cart, creating an empty one on first access."""
    return await carts.get_or_create(session_id)


@cart_router.post("/{session_id}/items", response_model=Cart, responses=ERROR_RESPONSES)
async def add_cart_item(
    session_id: str,
    body: AddCartItemRequest,
    carts: CartService = Depends(get_cart_service),
) -> Cart:
    """Add a menu item; adding the same item again increases its quantity."""
    return await carts.add_item(session_id, body.menu_item_id, body.quantity)


@cart_router.put(
    "/{session_id}/items/{item_id}",
    response_model=Cart,
    responses=ERROR_RESPONSES,
)
async def update_cart_item(
    session_id: str,
    item_id: str,
    body: UpdateCartItemRequest,
    carts: CartService = Depends(get_cart_service),
) -> Cart:
    """Set the quantity of the cart line whose line id is ``item_id``."""
    return await carts.update_quantity(session_id, item_id, body.quantity)


@cart_router.delete(
    "/{session_id}/items/{item_id}",
    response_model=Cart,
    responses=ERROR_RESPONSES,
)
async def remove_cart_item(
    session_id: str,
    item_id: str,
    carts: CartService = Depends(get_cart_service),
) -> Cart:
    """Remove the cart line whose line id is ``item_id``."""
    return await carts.remove_item(session_id, item_id)


@cart_router.delete("/{session_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def clear_cart(
    session_id: str,
    carts: CartService = Depends(get_cart_service),
) -> MessageResponse:
    await carts.clear(session_id)
    return MessageResponse(message="Cart cleared successfully")


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

order_router = APIRouter(prefix="/api/orders", tags=["Orders"])


@order_router.post(
    "",
    response_model=OrderCreateResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
    summary="Place Order",
)
async def create_order(
    order_data: OrderCreate,
    orders: OrderService = Depends(get_order_service),
) -> OrderCreateResponse:
    """Price the requested items at current menu prices and record the order."""
    order = await orders.place_order(order_data.items, order_data.customer_info)
    return OrderCreateResponse(
        success=True,
        order=order,
        message="Order placed successfully",
    )


@order_router.get(
    "",
    response_model=list[Order],
    responses=ERROR_RESPONSES,
    summary="List Orders",
)
async def list_orders(
    status: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    orders: OrderService = Depends(get_order_service),
) -> list[Order]:
    """Orders newest first, filtered by status and inclusive creation-time bounds."""
    return await orders.list_orders(status, start_date, end_date)


@order_router.get("/{order_id}", response_model=Order, responses=ERROR_RESPONSES)
async def get_order(
    order_id: str,
    orders: OrderService = Depends(get_order_service),
) -> Order:
    return await orders.get_order(order_id)


@order_router.patch(
    "/{order_id}/status",
    response_model=Order,
    responses=ERROR_RESPONSES,
    summary="Update Order Status",
)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    orders: OrderService = Depends(get_order_service),
) -> Order:
    return await orders.update_status(order_id, body.status)


# =============================================================================
# TEST ENDPOINTS (non-production only)
# =============================================================================

test_router = APIRouter(prefix="/api/test", tags=["Testing"])


@test_router.get("/reset-carts", response_model=ResetResponse)
async def reset_carts(store: BaseStore = Depends(get_store)) -> ResetResponse:
    """Delete every cart."""
    deleted = await store.delete_carts()
    logger.warning(f"Test reset: {deleted} carts deleted")
    return ResetResponse(
        success=True,
        message="Test carts cleared",
        deleted_count=deleted,
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def service_error_handler(request: Request, exc: SmokehouseError) -> JSONResponse:
    """Render NotFound / InvalidArgument / CollaboratorUnavailable."""
    if isinstance(exc, CollaboratorUnavailable):
        logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.detail})")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are reported as 400."""
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"{request.method} {request.url.path}: invalid request ({errors})")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request", "detail": errors},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    debug = request.app.state.settings.debug

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    store: Optional[BaseStore] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to use; when None one is created from settings at startup
        app_settings: Settings override (defaults to get_settings())

    Returns:
        FastAPI: Configured application
    """
    app_settings = app_settings or get_settings()

    app = FastAPI(
        title=app_settings.app_name,
        description="Menu, session cart and order API for the Smokey restaurant storefront.",
        version=app_settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = app_settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    if not app_settings.is_production:
        app.include_router(test_router)

    app.add_exception_handler(SmokehouseError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    return app


app = create_app()
