"""mailroom database layer: base, engine, session, exceptions, handle."""

from mailroom.db.base import Base, Property
from mailroom.db.database import Database, DatabaseMode, create_database, open_database
from mailroom.db.engine import index_dir, index_file, make_engine
from mailroom.db.exceptions import (
    DatabaseError,
    DatabaseExistsError,
    DatabaseNotFoundError,
    ReadOnlyDatabaseError,
)
from mailroom.db.session import create_session_factory, get_session

__all__ = [
    "Base",
    "Property",
    "Database",
    "DatabaseMode",
    "create_database",
    "open_database",
    "index_dir",
    "index_file",
    "make_engine",
    "create_session_factory",
    "get_session",
    "DatabaseError",
    "DatabaseExistsError",
    "DatabaseNotFoundError",
    "ReadOnlyDatabaseError",
]
