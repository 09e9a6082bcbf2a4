"""mailroom setup: write the configuration file and create the database."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from mailroom.cli.gates import ExitCode
from mailroom.cli.shared import SharedOptions, extra_arguments, minimal_options
from mailroom.config import ConfigError, ConfigHandle
from mailroom.db import DatabaseError, create_database, index_file


def _prompt_settings(config: ConfigHandle) -> None:
    user = config.config.user
    if config.is_new:
        typer.echo("Welcome to mailroom!\n\nLet's set up your configuration.\n")
    name = typer.prompt("Your full name", default=user.name)
    email = typer.prompt("Your primary email address", default=user.primary_email)
    path = typer.prompt("Top-level directory of your email archive", default=config.config.database.path)
    config.set("user.name", [name])
    config.set("user.primary_email", [email])
    config.set("database.path", [path])


def setup_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Prompt for the basic settings, save them, and create the database if missing."""
    if argv:
        index = minimal_options("setup", argv, shared)
        if index < 0 or extra_arguments("setup", argv, index):
            return ExitCode.FAILURE

    try:
        _prompt_settings(config)
        config.save()
    except typer.Abort:
        typer.echo("Aborted!", err=True)
        return ExitCode.FAILURE
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    except OSError as exc:
        typer.echo(f"Error saving configuration to {config.path}: {exc.strerror or exc}", err=True)
        return ExitCode.FAILURE
    typer.echo(f"Saved configuration to {config.path}")

    db_path = config.config.database.path
    if index_file(db_path).exists():
        return ExitCode.SUCCESS
    try:
        database = create_database(db_path)
        try:
            _, db_uuid = database.get_revision()
        finally:
            database.close()
    except DatabaseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    typer.echo(f"Created database {db_uuid} at {db_path}")
    return ExitCode.SUCCESS
