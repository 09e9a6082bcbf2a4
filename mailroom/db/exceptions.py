"""Database-related exceptions for mailroom."""

from pathlib import Path


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseNotFoundError(DatabaseError):
    """Raised when no database exists at the configured path."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Cannot open database at {path}: no such database")


class DatabaseExistsError(DatabaseError):
    """Raised when creating a database where one already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"A mailroom database already exists at {path}")


class ReadOnlyDatabaseError(DatabaseError):
    """Raised when a write is attempted on a database opened read-only."""

    pass
