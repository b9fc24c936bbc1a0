"""
MovieNotes Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for failures the client cannot fix.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    MovieNotesError (base)
    └── DatabaseError   → 500 Internal Server Error

Malformed requests never reach this hierarchy: FastAPI rejects them with
RequestValidationError, which main.py maps to a 422 response.
"""

from typing import Any, Dict, Optional


class MovieNotesError(Exception):
    """
    Base exception for all MovieNotes application errors.

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


class DatabaseError(MovieNotesError):
    """
    Raised when a write to the store fails.

    What:    An insert, delete or commit failed.
    When:    Database file unreadable or locked past the driver timeout,
             disk full, connection lost mid-statement.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; SQL text and driver
    errors go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
