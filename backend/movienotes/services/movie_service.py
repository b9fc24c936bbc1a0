"""
MovieNotes Backend: Movie Service
==================================

What:  The three store operations behind the HTTP surface: list, add, remove.
How:   Each method issues a single parameterized statement through the
       request's AsyncSession and commits its own writes.
Who:   Called by route handlers in routes/movies.py.

Failure policy:
    list_movies   store failure → empty list (see _empty_list_fallback)
    add_movie     store failure → DatabaseError (→ 500)
    remove_movie  store failure → DatabaseError (→ 500)

MovieService is stateless; it receives the session for each call.
"""

import logging
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from movienotes.exceptions import DatabaseError
from movienotes.models.movie import Movie
from movienotes.schemas.movie import MovieCreate, MovieResponse

logger = logging.getLogger(__name__)


class MovieService:
    """
    Store operations for movie notes.

    Responsibilities:
        - list_movies(): every note, newest first
        - add_movie(): insert one note and echo it back with its id
        - remove_movie(): delete every note for one TMDB movie
    """

    async def list_movies(self, db: AsyncSession) -> List[MovieResponse]:
        """
        Return all notes ordered by id descending (most recently created first).

        Query plan:
            SELECT * FROM movies ORDER BY id DESC
            → walks the primary key index backwards, no sort step

        Returns:
            List of MovieResponse; empty when the table is empty or the
            query fails.
        """
        try:
            result = await db.execute(select(Movie).order_by(desc(Movie.id)))
            movies = result.scalars().all()
        except Exception as e:
            return await self._empty_list_fallback(db, e)

        return [MovieResponse.model_validate(movie) for movie in movies]

    async def _empty_list_fallback(self, db: AsyncSession, error: Exception) -> List[MovieResponse]:
        """
        Read-path degradation: a failed list query is reported as "no rows".

        Clients cannot tell a store failure from an empty table here. Replace
        this method with a raise of DatabaseError to surface read failures.
        """
        logger.error("Listing movies failed, returning empty list: %s", str(error), exc_info=True)
        await db.rollback()
        return []

    async def add_movie(self, db: AsyncSession, payload: MovieCreate) -> MovieResponse:
        """
        Insert a new note and return it with the store-assigned id.

        Args:
            db: Async database session (injected by FastAPI)
            payload: Validated request body

        Returns:
            MovieResponse echoing the submitted fields exactly

        Raises:
            DatabaseError: Insert or commit failed (→ 500)
        """
        movie = Movie(
            tmdb_id=payload.tmdb_id,
            title=payload.title,
            comment=payload.comment,
            user_name=payload.user_name,
            poster_path=payload.poster_path,
            release_date=payload.release_date,
        )
        try:
            db.add(movie)
            await db.commit()
        except Exception as e:
            logger.error("Insert failed for tmdb_id=%s: %s", payload.tmdb_id, str(e), exc_info=True)
            await db.rollback()
            raise DatabaseError(
                message="Could not save the movie note. Please try again.",
                context={"tmdb_id": payload.tmdb_id, "error_type": type(e).__name__},
            )

        logger.info("Movie note %s created for tmdb_id=%s", movie.id, movie.tmdb_id)
        return MovieResponse.model_validate(movie)

    async def remove_movie(self, db: AsyncSession, tmdb_id: int) -> int:
        """
        Delete every note whose TMDB id equals `tmdb_id`.

        Matching is on the external catalog id, never on the note's own
        primary key. All notes for the same movie go in one call; a value
        that matches nothing is a no-op.

        Returns:
            Number of rows deleted (zero or more)

        Raises:
            DatabaseError: Delete or commit failed (→ 500)
        """
        try:
            # No identity-map sync: sessions are per request and hold no Movie objects
            result = await db.execute(
                delete(Movie)
                .where(Movie.tmdb_id == tmdb_id)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except Exception as e:
            logger.error("Delete failed for tmdb_id=%s: %s", tmdb_id, str(e), exc_info=True)
            await db.rollback()
            raise DatabaseError(
                message="Could not delete the movie notes. Please try again.",
                context={"tmdb_id": tmdb_id, "error_type": type(e).__name__},
            )

        deleted = result.rowcount
        logger.info("Deleted %d movie note(s) for tmdb_id=%s", deleted, tmdb_id)
        return deleted


# ── Singleton Instance ────────────────────────────────────────────────────
movie_service = MovieService()
