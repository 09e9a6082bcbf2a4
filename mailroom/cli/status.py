"""mailroom status: show the database path, uuid and revision."""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum

import typer
from rich.console import Console
from rich.table import Table

from mailroom.cli.gates import ExitCode, exit_if_unmatched_db_uuid, exit_if_unsupported_format
from mailroom.cli.options import OptionDesc, OptionError, parse_arguments
from mailroom.cli.shared import SHARED_OPTIONS, SharedOptions, extra_arguments, process_shared_options
from mailroom.config import ConfigHandle
from mailroom.db import DatabaseError, DatabaseMode, open_database


class OutputFormat(Enum):
    TEXT = "text"
    JSON = "json"


STATUS_OPTIONS: tuple[OptionDesc, ...] = (
    OptionDesc.inherit_from(SHARED_OPTIONS),
    OptionDesc.keyword("format", {fmt.value: fmt for fmt in OutputFormat}, dest="output_format"),
    OptionDesc.integer("format-version"),
)


def _print_status_table(info: dict) -> None:
    """Print status info as a Rich table."""
    console = Console()
    table = Table(title="mailroom database status", show_header=True, header_style="bold")
    table.add_column("Item", style="dim")
    table.add_column("Value")
    table.add_row("Path", info["path"])
    table.add_row("UUID", info["uuid"])
    table.add_row("Revision", str(info["revision"]))
    console.print(table)


def status_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Print the identity of the configured database.

    The uuid printed here is what callers pass back with ``--uuid`` to pin
    later commands to this database.
    """
    try:
        index, values = parse_arguments(argv, STATUS_OPTIONS, start=1)
    except OptionError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    shared.update(values)
    process_shared_options(shared, "status")
    if extra_arguments("status", argv, index):
        return ExitCode.FAILURE
    output_format = values.get("output_format", OutputFormat.TEXT)
    if output_format is OutputFormat.JSON:
        exit_if_unsupported_format(shared)

    try:
        database = open_database(config.config.database.path, DatabaseMode.READ_ONLY)
    except DatabaseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    try:
        exit_if_unmatched_db_uuid(database, shared)
        revision, db_uuid = database.get_revision()
    except DatabaseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    finally:
        database.close()

    info = {"path": str(database.path), "uuid": db_uuid, "revision": revision}
    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps({"format_version": shared.format_version, **info}))
    else:
        _print_status_table(info)
    return ExitCode.SUCCESS
