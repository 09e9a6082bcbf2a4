"""Options every subcommand understands, and what they short-circuit.

A subcommand that wants ``--version``, ``--help`` and ``--uuid`` puts
``OptionDesc.inherit_from(SHARED_OPTIONS)`` first in its own option list,
merges the parsed values with :meth:`SharedOptions.update` and then calls
:func:`process_shared_options` before doing any work.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from importlib import metadata
from typing import Any

import typer

from mailroom.cli.gates import FORMAT_CUR, ExitCode
from mailroom.cli.options import OptionDesc, OptionError, parse_arguments

SHARED_OPTIONS: tuple[OptionDesc, ...] = (
    OptionDesc.boolean("version"),
    OptionDesc.boolean("help"),
    OptionDesc.string("uuid"),
)


@dataclass
class SharedOptions:
    """Parsed shared option values for one invocation."""

    version: bool = False
    help: bool = False
    uuid: str | None = None
    format_version: int = FORMAT_CUR

    def update(self, values: Mapping[str, Any]) -> None:
        """Copy recognized values from a ``parse_arguments`` result."""
        for key in ("version", "help", "uuid", "format_version"):
            if key in values:
                setattr(self, key, values[key])


def product_version() -> str:
    try:
        return metadata.version("mailroom")
    except metadata.PackageNotFoundError:
        return "unknown"


def process_shared_options(shared: SharedOptions, subcommand_name: str | None) -> None:
    """Act on ``--version`` / ``--help``; return only when neither was given.

    ``--version`` is checked first and wins when both are present.
    """
    if shared.version:
        typer.echo(f"mailroom {product_version()}")
        raise SystemExit(ExitCode.SUCCESS)

    if shared.help:
        from mailroom.cli.help import help_for

        raise SystemExit(help_for(subcommand_name))


def minimal_options(subcommand_name: str, argv: Sequence[str], shared: SharedOptions) -> int:
    """Parse only the shared options for a subcommand that never opens the database.

    ``argv[0]`` is the subcommand name when present. Returns the index of the
    first non-option argument, or -1 when parsing failed; callers must then
    stop with a failure status.
    """
    try:
        index, values = parse_arguments(argv, SHARED_OPTIONS, start=1 if argv else 0)
    except OptionError as exc:
        typer.echo(f"Error: {exc}", err=True)
        return -1
    shared.update(values)
    process_shared_options(shared, subcommand_name)
    return index


def extra_arguments(subcommand_name: str, argv: Sequence[str], index: int) -> bool:
    """Report positional arguments left after the options of an options-only subcommand."""
    if index >= len(argv):
        return False
    typer.echo(f"Error: mailroom {subcommand_name} takes no arguments (got '{argv[index]}')", err=True)
    return True
