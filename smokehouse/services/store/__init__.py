"""
Store Factory

Provides a single entry point for building the persistence backend.
The rest of the application only sees ``BaseStore``.

Usage:
    from smokehouse.services.store import create_store

    # Returns MemoryStore or SQLStore based on STORE_BACKEND
    store = create_store()
    await store.connect()

Backend Switching:
    - STORE_BACKEND=memory → MemoryStore (no database needed)
    - STORE_BACKEND=sql → SQLStore (PostgreSQL at DATABASE_URL)

The store is owned by the FastAPI application (``app.state.store``) and
passed to the services explicitly; there is no module-level instance.
"""

import logging
from typing import Optional

from smokehouse.core.config import Settings, StoreBackend, get_settings
from smokehouse.services.store.base import BaseStore
from smokehouse.services.store.memory import MemoryStore
from smokehouse.services.store.sql import SQLStore

logger = logging.getLogger(__name__)


def create_store(settings: Optional[Settings] = None) -> BaseStore:
    """
    Build the configured store.

    Args:
        settings: Settings to read the backend from (defaults to get_settings())

    Returns:
        BaseStore: Unconnected store instance; call ``connect()`` before use
    """
    settings = settings or get_settings()

    if settings.store_backend == StoreBackend.MEMORY:
        logger.info("Store: Using MemoryStore")
        return MemoryStore()

    logger.info("Store: Using SQLStore (PostgreSQL)")
    return SQLStore(settings.database_url, echo=settings.database_echo)


__all__ = [
    "create_store",
    "BaseStore",
    "MemoryStore",
    "SQLStore",
]
