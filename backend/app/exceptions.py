"""
Blog API Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions, each carrying an HTTP status code.
How:   Services and dependencies raise these; the global handler registered in
       main.py renders every one of them as {"message", "statusCode"}.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    BlogAPIError (base)
    ├── BadRequestError     → 400 Bad Request (missing/invalid body fields)
    ├── UnauthorizedError   → 401 Unauthorized (token or credentials rejected)
    ├── NotFoundError       → 404 Not Found (unknown post id or route)
    └── InternalError       → 500 Internal Server Error

Handlers never build error responses themselves. They raise, and a single
responder turns the exception into the response body.
"""

from typing import Any, Dict, Optional


class BlogAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      User-facing error description (returned in the response)
        status_code:  HTTP status the global handler responds with
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal Server Error",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(BlogAPIError):
    """
    Raised when the request body is missing required fields or is malformed.

    Raised before any write to the store, so a rejected request never leaves
    a partial mutation behind.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Bad Request",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class UnauthorizedError(BlogAPIError):
    """
    Raised for a missing bearer token, an invalid or expired token,
    and for rejected login credentials.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BlogAPIError):
    """Raised when a post id (or a route) does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str = "Blog post not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class InternalError(BlogAPIError):
    """
    Raised for failures the client cannot fix.

    The message returned to the client is always generic; details stay in
    `context` and the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
