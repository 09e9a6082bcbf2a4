"""mailroom compact: rebuild the database index file in place."""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

import typer

from mailroom.cli.gates import ExitCode, exit_if_unmatched_db_uuid
from mailroom.cli.options import OptionDesc, OptionError, parse_arguments
from mailroom.cli.shared import SHARED_OPTIONS, SharedOptions, extra_arguments, process_shared_options
from mailroom.config import ConfigHandle
from mailroom.db import DatabaseError, DatabaseMode, open_database

COMPACT_OPTIONS: tuple[OptionDesc, ...] = (
    OptionDesc.inherit_from(SHARED_OPTIONS),
    OptionDesc.string("backup"),
    OptionDesc.boolean("quiet"),
)


def _format_size(size_bytes: int) -> str:
    """Format byte count as human-readable size."""
    n = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} PB"


def compact_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Vacuum the index, optionally copying the old file to ``--backup`` first."""
    try:
        index, values = parse_arguments(argv, COMPACT_OPTIONS, start=1)
    except OptionError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    shared.update(values)
    process_shared_options(shared, "compact")
    if extra_arguments("compact", argv, index):
        return ExitCode.FAILURE
    quiet = values.get("quiet", False)

    try:
        database = open_database(config.config.database.path, DatabaseMode.READ_WRITE)
    except DatabaseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    try:
        exit_if_unmatched_db_uuid(database, shared)
        index = database.index_path
        before = index.stat().st_size
        backup = values.get("backup")
        if backup:
            backup_path = Path(backup).expanduser()
            if backup_path.exists():
                typer.echo(f"Error: backup path {backup_path} already exists", err=True)
                return ExitCode.FAILURE
            shutil.copy2(index, backup_path)
            if not quiet:
                typer.echo(f"Backed up database to {backup_path}")
        database.compact()
        after = index.stat().st_size
    except DatabaseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    except OSError as exc:
        typer.echo(f"Error: {exc.strerror or exc}", err=True)
        return ExitCode.FAILURE
    finally:
        database.close()

    if not quiet:
        typer.echo(f"Compacted database: {_format_size(before)} -> {_format_size(after)}")
    return ExitCode.SUCCESS
