"""Open, create and query the mailroom database."""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from pathlib import Path

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from mailroom.db.base import Base, Property
from mailroom.db.engine import index_dir, index_file, make_engine
from mailroom.db.exceptions import (
    DatabaseError,
    DatabaseExistsError,
    DatabaseNotFoundError,
    ReadOnlyDatabaseError,
)
from mailroom.db.session import get_session

logger = logging.getLogger(__name__)

UUID_KEY = "uuid"
REVISION_KEY = "revision"


class DatabaseMode(Enum):
    READ_ONLY = "read_only"
    READ_WRITE = "read_write"


class Database:
    """An open database; call :meth:`close` when done."""

    def __init__(self, path: Path, engine: Engine, mode: DatabaseMode) -> None:
        self.path = path
        self.mode = mode
        self._engine = engine

    @property
    def index_path(self) -> Path:
        return index_file(self.path)

    def get_revision(self) -> tuple[int, str]:
        """Return ``(revision, uuid)``: the uuid names this database, the revision counts its changes.

        Raises:
            DatabaseError: the properties cannot be read.
        """
        try:
            with get_session(self._engine) as session:
                stored = {row.key: row.value for row in session.query(Property).all()}
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot read database revision: {exc}") from exc
        if UUID_KEY not in stored:
            raise DatabaseError(f"Database at {self.path} has no uuid")
        return int(stored.get(REVISION_KEY, "0")), stored[UUID_KEY]

    def compact(self) -> None:
        """Rebuild the index file to reclaim free pages."""
        if self.mode is not DatabaseMode.READ_WRITE:
            raise ReadOnlyDatabaseError("Cannot compact a database opened read-only")
        try:
            with self._engine.connect() as conn:
                conn.execution_options(isolation_level="AUTOCOMMIT").execute(text("VACUUM"))
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Compaction failed: {exc}") from exc

    def close(self) -> None:
        self._engine.dispose()


def open_database(path: str | Path, mode: DatabaseMode = DatabaseMode.READ_ONLY) -> Database:
    """Open the database of the mail store at ``path``.

    Raises:
        DatabaseNotFoundError: no index exists under ``path``.
    """
    root = Path(path).expanduser()
    if not index_file(root).is_file():
        raise DatabaseNotFoundError(root)
    engine = make_engine(root, read_only=mode is DatabaseMode.READ_ONLY)
    logger.debug("opened database %s (%s)", root, mode.value)
    return Database(root, engine, mode)


def create_database(path: str | Path) -> Database:
    """Create an empty database with a fresh uuid at revision 0.

    Raises:
        DatabaseExistsError: a database already exists under ``path``.
        DatabaseError: the index directory or file cannot be created.
    """
    root = Path(path).expanduser()
    if index_file(root).exists():
        raise DatabaseExistsError(root)
    try:
        index_dir(root).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DatabaseError(f"Cannot create database directory {index_dir(root)}: {exc.strerror}") from exc
    engine = make_engine(root)
    try:
        Base.metadata.create_all(engine)
        with get_session(engine) as session:
            session.add_all(
                [
                    Property(key=UUID_KEY, value=str(uuid.uuid4())),
                    Property(key=REVISION_KEY, value="0"),
                ]
            )
    except SQLAlchemyError as exc:
        engine.dispose()
        raise DatabaseError(f"Cannot create database at {root}: {exc}") from exc
    logger.info("created database at %s", root)
    return Database(root, engine, DatabaseMode.READ_WRITE)
