"""
Error taxonomy for the content API.
Every failure a handler can produce maps to exactly one HTTP status.
"""
from typing import Any

from fastapi import status


class ContentAPIError(Exception):
    """Base exception carrying the HTTP status and envelope title."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    title: str = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.title, "detail": self.message}


class ValidationError(ContentAPIError):
    """Missing or empty required field, or an unusable update payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation error"


class NoOpError(ValidationError):
    """Partial update carrying no eligible field."""

    title = "Nothing to update"

    def __init__(self, message: str = "nothing to update"):
        super().__init__(message)


class Unauthorized(ContentAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Unauthorized"

    def __init__(self, message: str = "Admin token missing or invalid"):
        super().__init__(message)


class NotFound(ContentAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not found"

    def __init__(self, resource: str, record_id: Any):
        super().__init__(f"{resource} {record_id} does not exist")
        self.resource = resource
        self.record_id = record_id


class StoreError(ContentAPIError):
    """
    Failure reported by the underlying store (connection loss, constraint
    violation, bad input for a column type).
    The message is the driver's own text; statement text is never included.
    """

    title = "Store error"
