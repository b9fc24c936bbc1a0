"""
MovieNotes Backend: Movie Route Handlers
=========================================

What:  GET /movies (list), POST /movies (create), DELETE /movies/{id} (remove).
How:   Body and path decoding is done by FastAPI; handlers delegate to
       MovieService and return its result.
Who:   Called by the browser front end.

DELETE /movies/{id}:
    The path segment is matched against the notes' TMDB id, not their own id.
    The handler names the parameter `tmdb_id` accordingly; the URL is unchanged.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from movienotes.database import get_db_session
from movienotes.schemas.movie import (
    ErrorResponse,
    MovieCreate,
    MovieResponse,
    TMDB_ID_MAX,
    TMDB_ID_MIN,
)
from movienotes.services.movie_service import movie_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Movies"])


@router.get(
    "/movies",
    response_model=List[MovieResponse],
    summary="List all movie notes",
    description="Returns every stored note, most recently created first.",
)
async def list_movies(
    db: AsyncSession = Depends(get_db_session),
) -> List[MovieResponse]:
    return await movie_service.list_movies(db)


@router.post(
    "/movies",
    response_model=MovieResponse,
    responses={
        200: {"description": "The created note", "model": MovieResponse},
        422: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a movie note",
)
async def add_movie(
    payload: MovieCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    """
    Store a new note.

    Responds with the stored note, including its assigned `id`; all other
    fields are echoed exactly as submitted.
    """
    return await movie_service.add_movie(db, payload)


@router.delete(
    "/movies/{tmdb_id}",
    response_class=Response,
    responses={
        200: {"description": "Matching notes deleted (possibly none)"},
        422: {"description": "Path id is not a 64-bit integer", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Delete all notes for a TMDB movie",
)
async def remove_movie(
    tmdb_id: int = Path(
        ge=TMDB_ID_MIN,
        le=TMDB_ID_MAX,
        description="TMDB id whose notes are deleted",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Delete every note whose TMDB id equals the path value.

    Always answers 200 with an empty body when the statement succeeds,
    whether it removed zero, one or several notes.
    """
    await movie_service.remove_movie(db, tmdb_id)
    return Response(status_code=200)
