"""Engine creation for the SQLite file behind a mailroom database."""

from pathlib import Path
from urllib.parse import quote

from sqlalchemy import URL, Engine, create_engine

INDEX_DIRNAME = ".mailroom"
INDEX_FILENAME = "index.sqlite3"


def index_dir(database_path: str | Path) -> Path:
    """Directory holding the index inside the mail store."""
    return Path(database_path).expanduser() / INDEX_DIRNAME


def index_file(database_path: str | Path) -> Path:
    return index_dir(database_path) / INDEX_FILENAME


def make_engine(database_path: str | Path, *, read_only: bool = False, echo: bool = False) -> Engine:
    """Create an engine for the index of the mail store at ``database_path``.

    Args:
        database_path: Top-level mail directory (``database.path`` setting).
        read_only: Open the SQLite file with ``mode=ro``.
        echo: Log SQL (for development).
    """
    target = index_file(database_path).resolve()
    if read_only:
        # URI filenames are percent-decoded by SQLite.
        url = URL.create(
            "sqlite",
            database=f"file:{quote(str(target))}",
            query={"mode": "ro", "uri": "true"},
        )
    else:
        url = URL.create("sqlite", database=str(target))
    return create_engine(url, echo=echo)
