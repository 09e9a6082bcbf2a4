"""mailroom config: get, set or list configuration items."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from mailroom.cli.gates import ExitCode
from mailroom.cli.shared import SharedOptions, minimal_options
from mailroom.config import ConfigError, ConfigHandle

_USAGE = "Usage: mailroom config get <section>.<item> | set <section>.<item> [value ...] | list"


def _echo_value(value: object) -> None:
    if isinstance(value, list):
        for item in value:
            typer.echo(item)
    else:
        typer.echo(value)


def _list_items(config: ConfigHandle) -> None:
    for key, value in config.items():
        if isinstance(value, list):
            value = ";".join(str(item) for item in value)
        typer.echo(f"{key}={value}")


def config_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Dispatch ``get``, ``set`` and ``list`` against the open configuration."""
    index = minimal_options("config", argv, shared)
    if index < 0:
        return ExitCode.FAILURE
    rest = list(argv[index:])
    if not rest:
        typer.echo(f"Error: mailroom config requires at least one argument.\n{_USAGE}", err=True)
        return ExitCode.FAILURE

    action, args = rest[0], rest[1:]
    try:
        if action == "get":
            if len(args) != 1:
                typer.echo(f"Error: mailroom config get requires exactly one argument.\n{_USAGE}", err=True)
                return ExitCode.FAILURE
            _echo_value(config.get(args[0]))
        elif action == "set":
            if not args:
                typer.echo(f"Error: mailroom config set requires at least one argument.\n{_USAGE}", err=True)
                return ExitCode.FAILURE
            config.set(args[0], args[1:])
            config.save()
        elif action == "list":
            _list_items(config)
        else:
            typer.echo(f"Error: Unrecognized command: mailroom config {action}\n{_USAGE}", err=True)
            return ExitCode.FAILURE
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return ExitCode.FAILURE
    except OSError as exc:
        typer.echo(f"Error saving configuration to {config.path}: {exc.strerror or exc}", err=True)
        return ExitCode.FAILURE
    return ExitCode.SUCCESS
