"""
MovieNotes Backend: Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between front end and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate OpenAPI documentation.

Request bodies are strict: a JSON string is not accepted where an integer is
expected and vice versa. Presence and JSON type are the only checks; values
are stored exactly as submitted.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# SQLite INTEGER is a signed 64-bit value; larger ids are rejected at decoding
TMDB_ID_MIN = -(2**63)
TMDB_ID_MAX = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class MovieCreate(BaseModel):
    """
    What:  Body of POST /movies.

    Required: tmdb_id, title, comment, user_name.
    Optional: poster_path, release_date (absent and null are equivalent).
    Unknown fields are ignored.
    """
    tmdb_id: int = Field(
        ge=TMDB_ID_MIN,
        le=TMDB_ID_MAX,
        description="Movie id in the external TMDB catalog",
    )
    title: str = Field(description="Movie title")
    comment: str = Field(description="Free-text note about the movie")
    user_name: str = Field(description="Name of the note's author")
    poster_path: Optional[str] = Field(default=None, description="TMDB poster path")
    release_date: Optional[str] = Field(
        default=None,
        description="Release date as free text (not parsed)",
    )

    model_config = ConfigDict(strict=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MovieResponse(BaseModel):
    """
    What:  A stored movie note.
    Who:   Returned by POST /movies and, as array items, by GET /movies.

    Optional fields are always present, serialized as null when unset.
    """
    id: int = Field(description="Store-assigned note id")
    tmdb_id: int = Field(description="Movie id in the external TMDB catalog")
    title: str
    comment: str
    user_name: str
    poster_path: Optional[str] = None
    release_date: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "server_error")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed decoding)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
