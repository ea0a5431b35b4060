"""Domain exceptions for the reaction and parcel-order services.

Services raise these; ``app.api.error_handlers`` turns them into HTTP
responses. Only ``Conflict`` is ever retried, and only inside the service
that raised it.
"""

from fastapi import status


class CampusCrushError(Exception):
    """Base class for errors reported to the caller as a distinct kind."""

    code = "error"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be completed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(CampusCrushError):
    """Target, order or user does not exist."""

    code = "not_found"
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Forbidden(CampusCrushError):
    """Actor lacks rights on the resource."""

    code = "forbidden"
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "Not enough permissions"


class InvalidTransition(CampusCrushError):
    """Requested order status is not reachable from the current one."""

    code = "invalid_transition"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"

    def __init__(self, message: str = None, current_status: str = None, requested_status: str = None):
        self.current_status = current_status
        self.requested_status = requested_status
        if message is None and current_status and requested_status:
            message = f"Cannot move order from '{current_status}' to '{requested_status}'"
        super().__init__(message)


class Expired(CampusCrushError):
    """Order is past its ``expires_at`` at acceptance time."""

    code = "expired"
    http_status = status.HTTP_410_GONE
    default_message = "Order has expired"


class AlreadyRated(CampusCrushError):
    code = "already_rated"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Order has already been rated"


class Conflict(CampusCrushError):
    """A concurrent write won the race; the caller may retry."""

    code = "conflict"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Concurrent update detected, please retry"


class InvalidInput(CampusCrushError):
    code = "invalid_input"
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid input"
