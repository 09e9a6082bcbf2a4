"""CLI entry point: mailroom [--config=PATH] [--version] [--help] [--uuid=ID] [<command> [args...]]."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

import typer

from mailroom.cli import report
from mailroom.cli.gates import ExitCode
from mailroom.cli.options import OptionDesc, OptionError, parse_arguments
from mailroom.cli.registry import find_command
from mailroom.cli.shared import SHARED_OPTIONS, SharedOptions, process_shared_options
from mailroom.config import ConfigError, ConfigHandle, open_config

logger = logging.getLogger(__name__)

GLOBAL_OPTIONS: tuple[OptionDesc, ...] = (
    OptionDesc.string("config", dest="config_path"),
    OptionDesc.inherit_from(SHARED_OPTIONS),
)


def _exit_status(exc: SystemExit) -> int:
    """Map a SystemExit raised below the dispatcher to an exit status."""
    code = exc.code
    if code is None:
        return ExitCode.SUCCESS
    if isinstance(code, int):
        return int(code)
    typer.echo(str(code), err=True)
    return ExitCode.FAILURE


@dataclass
class Invocation:
    """State owned by one run of the CLI: parsed shared options and the open config."""

    argv: list[str]
    shared: SharedOptions = field(default_factory=SharedOptions)
    config: ConfigHandle | None = None
    tracing: bool = False

    def dispatch(self) -> int:
        try:
            index, values = parse_arguments(self.argv, GLOBAL_OPTIONS)
        except OptionError as exc:
            typer.echo(f"Error: {exc}", err=True)
            return ExitCode.FAILURE
        self.shared.update(values)

        command_name = self.argv[index] if index < len(self.argv) else None
        # Before lookup, so "--help bogus" still reaches the help resolver.
        process_shared_options(self.shared, command_name)

        entry = find_command(command_name)
        if entry is None:
            typer.echo(f"Error: Unknown command '{command_name}' (see \"mailroom help\")", err=True)
            return ExitCode.FAILURE
        logger.debug("dispatching %s", entry.name or "<default>")

        try:
            self.config = open_config(values.get("config_path"), create=entry.create_config)
        except ConfigError as exc:
            typer.echo(f"Error: {exc}", err=True)
            return ExitCode.FAILURE

        return entry.handler(self.config, self.argv[index:], self.shared)

    def teardown(self, status: int) -> int:
        """Release the config and write the allocation report; may downgrade ``status``."""
        if self.config is not None:
            self.config.close()
            self.config = None
        try:
            path = report.report_path()
            if path is not None and not report.write_report(path):
                status = ExitCode.FAILURE
        finally:
            if self.tracing:
                report.stop_tracing()
                self.tracing = False
        return status


def run(argv: Sequence[str] | None = None) -> int:
    """Run one invocation and return its exit status.

    ``SystemExit`` raised by ``--version``/``--help`` handling or by the
    compatibility gates is turned into the returned status, after teardown.
    """
    invocation = Invocation(list(sys.argv[1:] if argv is None else argv))
    invocation.tracing = report.start_tracing()
    status: int = ExitCode.FAILURE
    try:
        status = invocation.dispatch()
    except SystemExit as exc:
        status = _exit_status(exc)
    finally:
        status = invocation.teardown(status)
    return int(status)


def main() -> None:
    """Console script entry point."""
    try:
        status = run()
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(status)


if __name__ == "__main__":
    main()
