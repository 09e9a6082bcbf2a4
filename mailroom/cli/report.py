"""Allocation report written at exit when MAILROOM_TRACEMALLOC_REPORT is set."""

from __future__ import annotations

import os
import tracemalloc

import typer

REPORT_ENV = "MAILROOM_TRACEMALLOC_REPORT"
_TOP_STATS = 50


def report_path() -> str | None:
    """Return the requested report path, or None when the variable is unset or empty."""
    return os.environ.get(REPORT_ENV) or None


def start_tracing() -> bool:
    """Begin tracing allocations if a report was requested; True when tracing was started."""
    if report_path() is None or tracemalloc.is_tracing():
        return False
    tracemalloc.start()
    return True


def write_report(path: str) -> bool:
    """Write current allocation statistics to ``path``; False if the file cannot be opened."""
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        typer.echo(f"ERROR: unable to write allocation report. {path}: {exc.strerror or exc}", err=True)
        return False
    with handle:
        if not tracemalloc.is_tracing():
            handle.write("allocation tracing was not active\n")
            return True
        current, peak = tracemalloc.get_traced_memory()
        handle.write(f"current: {current} bytes\npeak: {peak} bytes\n\n")
        stats = tracemalloc.take_snapshot().statistics("lineno")
        for stat in stats[:_TOP_STATS]:
            handle.write(f"{stat}\n")
    return True


def stop_tracing() -> None:
    if tracemalloc.is_tracing():
        tracemalloc.stop()
