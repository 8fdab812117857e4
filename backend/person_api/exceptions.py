"""
Person API: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the store and the HTTP layer.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       problem responses with the matching HTTP status code.
Who:   Raised by PersonStore and the routes; caught by global handlers.

Exception Hierarchy:
    PersonApiError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   └── InvalidColorError    → 400 Bad Request (unknown color name)
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    └── CsvFileNotFoundError     → startup failure (never reaches a request)

Malformed CSV lines are not errors at all: the loader skips them.
"""

from typing import Any, Dict, Optional


class PersonApiError(Exception):
    """
    Base exception for all Person API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PersonApiError):
    """
    Raised when client input is rejected.

    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidColorError(ValidationError):
    """
    Raised by PersonStore.add() when a color name is not in the color table.

    Raised before the file or the in-memory list is touched, so a rejected
    append leaves no trace.
    """

    def __init__(self, color: str, allowed: Optional[list] = None):
        super().__init__(
            message=f"Unknown color '{color}'",
            field="color",
            context={"color": color, "allowed": allowed or []},
        )
        self.color = color


class NotFoundError(PersonApiError):
    """
    Raised when a requested resource does not exist.

    The store returns None for a missing id; routes convert that into this
    exception so the global handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"No {resource} with id {resource_id} exists."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class FileStorageError(PersonApiError):
    """
    Raised when reading or appending to the CSV file fails.

    When:    Disk full, permission denied, file removed under us.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CsvFileNotFoundError(PersonApiError):
    """Raised when the configured CSV file does not exist at store construction."""

    def __init__(self, path: str):
        super().__init__(
            message=f"File not found at {path}.",
            context={"path": path},
        )
        self.path = path
