"""
AgentDesk Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios the API reports.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services and the database layer; caught by global handlers.

Exception Hierarchy:
    AgentDeskError (base)
    ├── ValidationError       → 400 Bad Request
    ├── ConflictError         → 400 Bad Request (duplicate agent code)
    ├── NotFoundError         → 404 Not Found
    ├── DatabaseError         → 500 Internal Server Error (generic message)
    ├── LookupRequestError    → 400 Bad Request (lookup proxy)
    └── LookupServiceError    → 500 Internal Server Error (lookup proxy, with details)
"""

from typing import Any, Dict, Optional


class AgentDeskError(Exception):
    """
    Base exception for all AgentDesk application errors.

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


class ValidationError(AgentDeskError):
    """
    Raised when client input fails a validation rule.

    When:    Malformed commission, missing agent code on create, empty PATCH body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Commission must be a decimal number with at most 2 decimal places",
            "details": {"field": "commission"}
        }
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


class ConflictError(AgentDeskError):
    """
    Raised when a create would duplicate an existing unique key.

    HTTP:    400 Bad Request (kept at 400 for compatibility with existing clients)
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AgentDeskError):
    """
    Raised when a requested resource does not exist.

    When:    Lookup by code finds no row, UPDATE/DELETE affects zero rows,
             or a working-area filter matches nothing.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found", context=ctx)


class DatabaseError(AgentDeskError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, pool exhausted, constraint violation.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        SQL text and driver messages are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LookupRequestError(AgentDeskError):
    """
    Raised when a lookup request is missing its keyword.

    HTTP:    400 Bad Request, body {"error": message}
    """

    def __init__(
        self,
        message: str = "Keyword query parameter is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LookupServiceError(AgentDeskError):
    """
    Raised when the external lookup API cannot be used.

    When:    Network error, timeout, or a non-2xx status.
    HTTP:    500 Internal Server Error, body {"error": message, "details": detail}

    Unlike DatabaseError, the underlying error text is returned to the caller
    in `details`.
    """

    def __init__(
        self,
        detail: str,
        message: str = "Failed to fetch data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail
