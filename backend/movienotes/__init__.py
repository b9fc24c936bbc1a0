"""
MovieNotes Backend: Application Package Initializer
====================================================

What: A small HTTP service for recording, listing and deleting notes about
      movies, backed by one SQLite table.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Store access)     │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy + aiosqlite
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
