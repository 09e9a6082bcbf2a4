"""mailroom with no command: first-run setup, or a pointer to what to do next."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from mailroom.cli.gates import ExitCode
from mailroom.cli.shared import SharedOptions
from mailroom.config import ConfigHandle
from mailroom.db import index_dir


def welcome_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Run setup for an unconfigured user; otherwise report on the database."""
    if config.is_new:
        from mailroom.cli.setup import setup_command

        return setup_command(config, [], shared)

    db_dir = index_dir(config.config.database.path)
    try:
        db_dir.stat()
    except FileNotFoundError:
        typer.echo(
            "mailroom is configured, but there's not yet a database at\n\n"
            f"\t{db_dir}\n\n"
            'You probably want to run "mailroom setup" now to create that database.\n'
        )
        return ExitCode.SUCCESS
    except OSError as exc:
        typer.echo(f"Error looking for mailroom database at {db_dir}: {exc.strerror}", err=True)
        return ExitCode.FAILURE

    user = config.config.user
    typer.echo(
        "mailroom is configured and appears to have a database. Excellent!\n\n"
        "At this point you can start exploring mailroom with commands such as:\n\n"
        "\tmailroom status\n\n"
        "\tmailroom config list\n\n"
        f"Configured user: {user.name} <{user.primary_email}>\n\n"
        'See "mailroom help" for the full list of commands.\n'
    )
    return ExitCode.SUCCESS
