"""
Error Taxonomy

Every failure the cart, order and menu services report to callers is one of
the exceptions below. The HTTP layer maps them onto status codes:

    NotFound                -> 404
    InvalidArgument         -> 400
    CollaboratorUnavailable -> 500
"""

from typing import Optional


class SmokehouseError(Exception):
    """
    Base class for service errors.

    Attributes:
        message: Human-readable description sent to the client
        detail: Optional extra context (e.g. the id that failed to resolve)
    """

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        """Convert to the ErrorResponse payload."""
        return {
            "success": False,
            "error": self.message,
            "detail": self.detail,
        }


class NotFound(SmokehouseError):
    """A referenced cart, line item, menu item or order does not exist."""

    status_code = 404


class InvalidArgument(SmokehouseError):
    """Malformed quantity, empty order, unknown status and the like."""

    status_code = 400


class CollaboratorUnavailable(SmokehouseError):
    """The persistence store could not be reached."""

    status_code = 500
