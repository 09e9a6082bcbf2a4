"""Exit codes and the compatibility gates subcommands run before trusting their input.

Two gates live here:

* the output-format gate compares the format version a caller asked for
  (``--format-version``) with the range this CLI can emit;
* the database identity gate compares the uuid a caller pinned with
  ``--uuid`` against the database that was actually opened.

Both terminate the process by raising ``SystemExit`` on failure; the main
dispatcher turns that into the returned status after its teardown.
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import TYPE_CHECKING

import typer

from mailroom.db.exceptions import DatabaseError

if TYPE_CHECKING:
    from mailroom.cli.shared import SharedOptions
    from mailroom.db.database import Database

logger = logging.getLogger(__name__)

FORMAT_CUR = 3
FORMAT_MIN = 1
FORMAT_MIN_ACTIVE = 2


class ExitCode(IntEnum):
    """Process exit statuses callers can script against."""

    SUCCESS = 0
    FAILURE = 1
    FORMAT_TOO_OLD = 20
    FORMAT_TOO_NEW = 21


class FormatCheck(Enum):
    """Outcome of comparing a requested format version with the supported range."""

    OK = "ok"
    DEPRECATED = "deprecated"
    TOO_OLD = "too_old"
    TOO_NEW = "too_new"


def check_format_version(
    requested: int,
    minimum: int = FORMAT_MIN,
    min_active: int = FORMAT_MIN_ACTIVE,
    current: int = FORMAT_CUR,
) -> FormatCheck:
    """Classify ``requested`` against ``minimum <= min_active <= current``."""
    if requested > current:
        return FormatCheck.TOO_NEW
    if requested < minimum:
        return FormatCheck.TOO_OLD
    if requested < min_active:
        return FormatCheck.DEPRECATED
    return FormatCheck.OK


def exit_if_unsupported_format(shared: SharedOptions) -> None:
    """Abort with a dedicated exit code when the requested format cannot be produced.

    A deprecated but still supported version only prints a warning.
    """
    requested = shared.format_version
    outcome = check_format_version(requested)
    if outcome is FormatCheck.TOO_NEW:
        typer.echo(
            f"A caller requested output format version {requested}, but the installed mailroom\n"
            f"CLI only supports up to format version {FORMAT_CUR}.  You may need to upgrade your\n"
            "mailroom CLI.",
            err=True,
        )
        raise SystemExit(ExitCode.FORMAT_TOO_NEW)
    if outcome is FormatCheck.TOO_OLD:
        typer.echo(
            f"A caller requested output format version {requested}, which is no longer supported\n"
            f"by the mailroom CLI (it requires at least version {FORMAT_MIN}).  You may need to\n"
            "upgrade your mailroom front-end.",
            err=True,
        )
        raise SystemExit(ExitCode.FORMAT_TOO_OLD)
    if outcome is FormatCheck.DEPRECATED:
        typer.echo(
            f"A caller requested deprecated output format version {requested}, which may not\n"
            "be supported in the future.",
            err=True,
        )


def exit_if_unmatched_db_uuid(database: Database, shared: SharedOptions) -> None:
    """Abort when ``--uuid`` was given and does not name the opened database."""
    if shared.uuid is None:
        return
    try:
        _, actual = database.get_revision()
    except DatabaseError as exc:
        logger.debug("revision query failed, comparing against empty uuid: %s", exc)
        actual = ""
    if shared.uuid != actual:
        typer.echo(
            f"Error: requested database revision {shared.uuid} does not match {actual}",
            err=True,
        )
        raise SystemExit(ExitCode.FAILURE)
