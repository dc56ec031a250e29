"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from smokehouse.core.config import (
    get_settings,
    setup_logging,
    Settings,
    EnvironmentMode,
    StoreBackend,
)
from smokehouse.core.exceptions import (
    SmokehouseError,
    NotFound,
    InvalidArgument,
    CollaboratorUnavailable,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "StoreBackend",
    "SmokehouseError",
    "NotFound",
    "InvalidArgument",
    "CollaboratorUnavailable",
]
