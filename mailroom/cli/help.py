"""mailroom help: built-in usage text, or a man page for a command or topic."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Sequence
from typing import TextIO

import typer

from mailroom.cli.gates import ExitCode
from mailroom.cli.registry import COMMANDS, HELP_TOPICS, find_command, find_help_topic
from mailroom.cli.shared import SharedOptions, minimal_options
from mailroom.config import ConfigHandle

logger = logging.getLogger(__name__)

PAGE_PREFIX = "mailroom"
DEFAULT_VIEWER = "man"


def usage(out: TextIO | None = None) -> None:
    """Print the command and topic tables in registration order."""
    lines = [
        "Usage: mailroom --help",
        "       mailroom --version",
        "       mailroom <command> [args...]",
        "",
        "The available commands are as follows:",
        "",
    ]
    lines.extend(f"  {entry.name:<12}  {entry.summary}" for entry in COMMANDS if entry.name)
    lines.extend(["", "Additional help topics are as follows:", ""])
    lines.extend(f"  {topic.name:<12}  {topic.summary}" for topic in HELP_TOPICS)
    lines.extend(
        [
            "",
            'Use "mailroom help <command or topic>" for more details on each command or topic.',
            "",
        ]
    )
    typer.echo("\n".join(lines), file=out)


def _viewer() -> str:
    return os.environ.get("MAILROOM_MAN", "").strip() or DEFAULT_VIEWER


def show_page(page: str) -> int | None:
    """Run the documentation viewer for ``page``; None when it cannot be started."""
    viewer = _viewer()
    try:
        command = shlex.split(viewer)
    except ValueError as exc:
        typer.echo(f"exec {viewer}: {exc}", err=True)
        return None
    logger.debug("delegating help to %s %s", command, page)
    try:
        completed = subprocess.run([*command, page], check=False)
    except OSError as exc:
        typer.echo(f"exec {command[0]}: {exc.strerror or exc}", err=True)
        return None
    return completed.returncode


def help_for(topic_name: str | None) -> int:
    """Resolve help for a command or topic name; ``None`` prints full usage."""
    if topic_name is None:
        typer.echo("The mailroom mail system.\n")
        usage()
        return ExitCode.SUCCESS

    if topic_name == "help":
        typer.echo(
            "The mailroom help system.\n\n"
            "\tmailroom uses the man command to display help. In case\n"
            "\tof difficulties check that MANPATH includes the pages\n"
            "\tinstalled by mailroom.\n\n"
            '\tTry "mailroom help" for a list of topics.'
        )
        return ExitCode.SUCCESS

    # Commands shadow topics of the same name.
    entry = find_command(topic_name)
    topic = find_help_topic(topic_name)
    name = entry.name if entry is not None else topic.name if topic is not None else None
    if name is not None:
        status = show_page(f"{PAGE_PREFIX}-{name}")
        if status is not None:
            return status

    typer.echo(
        f"\nSorry, {topic_name} is not a known command. There's not much I can do to help.\n",
        err=True,
    )
    return ExitCode.FAILURE


def help_command(config: ConfigHandle, argv: Sequence[str], shared: SharedOptions) -> int:
    """Handle ``mailroom help [<command-or-topic>]``."""
    index = minimal_options("help", argv, shared)
    if index < 0:
        return ExitCode.FAILURE
    rest = argv[index:]
    return help_for(rest[0] if rest else None)
