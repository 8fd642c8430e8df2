"""
Error taxonomy shared by every domain.

Domain code raises these typed errors; only the HTTP boundary in ``main.py``
turns them into responses of the shape ``{"kind": ..., "detail": ...}``.
"""

from typing import Optional


class AppointEaseError(Exception):
    """Base class for all recoverable domain errors"""

    kind = "Error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.message}


class Unauthenticated(AppointEaseError):
    kind = "Unauthenticated"
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(AppointEaseError):
    kind = "Forbidden"
    status_code = 403
    default_message = "Access denied"


class NotFound(AppointEaseError):
    kind = "NotFound"
    status_code = 404
    default_message = "Not found"


class InvalidTransition(AppointEaseError):
    kind = "InvalidTransition"
    status_code = 400
    default_message = "Invalid appointment status transition"


class ValidationError(AppointEaseError):
    kind = "ValidationError"
    status_code = 400
    default_message = "Invalid request"


class InvalidService(AppointEaseError):
    kind = "InvalidService"
    status_code = 400
    default_message = "Invalid service"


class ServiceProviderMismatch(AppointEaseError):
    kind = "ServiceProviderMismatch"
    status_code = 400
    default_message = "Service does not belong to the selected provider"


class Conflict(AppointEaseError):
    kind = "Conflict"
    status_code = 400
    default_message = "Resource already exists"


class StorageError(AppointEaseError):
    kind = "StorageError"
    status_code = 500
    default_message = "Internal server error"
