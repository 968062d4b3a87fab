"""
SnipBin Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three failure classes of the
       snippet store.
Why:   Services raise domain errors; global handlers (registered in main.py)
       turn them into HTTP responses, so routes never build error payloads.
How:   Each exception carries a user-facing message and an optional context
       dict. Context is logged server-side and never returned to the client.

Exception Hierarchy:
    SnipBinError (base)
    ├── ValidationError   → 400 Bad Request  {"error": message}
    ├── NotFoundError     → 404 Not Found    "Snippet not found" (text/plain)
    └── PersistenceError  → 500 Server Error {"error": "Server error"}

No retries happen anywhere: a failed storage call surfaces immediately.
"""

from typing import Any, Dict, Optional


class SnipBinError(Exception):
    """
    Base exception for all SnipBin application errors.

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


class ValidationError(SnipBinError):
    """
    Raised when submitted content is unusable.

    When:    No file and no text, whitespace-only text, oversized content.
    HTTP:    400 Bad Request
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


class NotFoundError(SnipBinError):
    """
    Raised when no snippet is stored under the requested key.

    HTTP:    404 Not Found

    Stores return None-free results: a missing row is converted into this
    exception at the store boundary so callers never check for None.
    """

    def __init__(
        self,
        resource: str = "snippet",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with key '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class PersistenceError(SnipBinError):
    """
    Raised when the storage layer fails.

    When:    Database unreachable, query failure, unexpected constraint error.
    HTTP:    500 Internal Server Error

    A duplicate-key failure on insert is NOT a PersistenceError: the store
    reports it as "already exists" instead.

    Security Note:
        The response body is always generic. The driver error (SQL, constraint
        names, hostnames) only ever reaches the server log via `context`.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
