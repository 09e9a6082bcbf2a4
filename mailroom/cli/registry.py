"""Command and help-topic tables."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mailroom.cli.shared import SharedOptions
    from mailroom.config import ConfigHandle

CommandHandler = Callable[["ConfigHandle", Sequence[str], "SharedOptions"], int]


@dataclass(frozen=True)
class CommandEntry:
    """A subcommand: its name, where its handler lives, and its help summary.

    ``target`` is ``"module:function"``; the module is imported on first use
    so that ``mailroom --version`` does not pay for every subcommand's imports.
    """

    name: str | None
    target: str
    create_config: bool
    summary: str

    @property
    def handler(self) -> CommandHandler:
        module_name, _, attr = self.target.partition(":")
        return getattr(importlib.import_module(module_name), attr)


@dataclass(frozen=True)
class HelpTopic:
    name: str
    summary: str


# The unnamed default entry stays first; usage output skips it.
COMMANDS: tuple[CommandEntry, ...] = (
    CommandEntry(None, "mailroom.cli.welcome:welcome_command", True, "mailroom main command."),
    CommandEntry(
        "setup",
        "mailroom.cli.setup:setup_command",
        True,
        "Interactively set up mailroom for first use.",
    ),
    CommandEntry(
        "status",
        "mailroom.cli.status:status_command",
        False,
        "Show the database uuid and revision.",
    ),
    CommandEntry(
        "compact",
        "mailroom.cli.compact:compact_command",
        False,
        "Compact the mailroom database.",
    ),
    CommandEntry(
        "config",
        "mailroom.cli.config_cmd:config_command",
        False,
        "Get or set settings in the mailroom configuration file.",
    ),
    # Creates a config in memory but never saves it.
    CommandEntry(
        "help",
        "mailroom.cli.help:help_command",
        True,
        "This message, or more detailed help for the named command.",
    ),
)

HELP_TOPICS: tuple[HelpTopic, ...] = (
    HelpTopic("search-terms", "Common search term syntax."),
    HelpTopic("hooks", "Hooks that will be run before or after certain commands."),
)


def find_command(name: str | None) -> CommandEntry | None:
    """Exact-name lookup; ``None`` resolves to the default entry."""
    for entry in COMMANDS:
        if entry.name == name:
            return entry
    return None


def find_help_topic(name: str) -> HelpTopic | None:
    for topic in HELP_TOPICS:
        if topic.name == name:
            return topic
    return None
