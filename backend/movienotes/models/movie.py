"""
MovieNotes Backend: Movie SQLAlchemy Model
===========================================

What:  ORM model representing the `movies` table in the SQLite database file.
How:   Inherits from DeclarativeBase; init_database() creates the table from it.
Who:   Used by MovieService for insert, list and delete operations.

Table Design:
    - Integer primary key assigned by SQLite, AUTOINCREMENT so ids are never
      reused, even after the newest row is deleted
    - tmdb_id: the movie's id in the external TMDB catalog; not unique, many
      notes may reference the same movie
    - poster_path / release_date: nullable free text, stored as submitted

On-disk contract:
    Table name `movies` and the column names below are read by external tools
    and by older versions of the service. New columns must be nullable and
    appended, so rows written by older versions stay valid.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from movienotes.database import Base


class Movie(Base):
    """
    A user's note about a movie.

    Lifecycle:
        1. Created by POST /movies (id assigned by the store)
        2. Read by GET /movies, newest first
        3. Deleted by DELETE /movies/{id}, matched on tmdb_id
        Never updated.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    user_name: Mapped[str] = mapped_column(Text, nullable=False)

    # What: TMDB poster path fragment, e.g. "/abc123.jpg"
    poster_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # What: Release date as the client sent it; never parsed
    release_date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Movie(id={self.id}, tmdb_id={self.tmdb_id}, title='{self.title}')>"
