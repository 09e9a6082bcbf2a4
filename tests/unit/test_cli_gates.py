"""Unit and property tests for the format and database identity gates."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mailroom.cli.gates import (
    FORMAT_CUR,
    FORMAT_MIN,
    FORMAT_MIN_ACTIVE,
    ExitCode,
    FormatCheck,
    check_format_version,
    exit_if_unmatched_db_uuid,
    exit_if_unsupported_format,
)
from mailroom.cli.shared import SharedOptions
from mailroom.db import DatabaseError


class _FakeDatabase:
    def __init__(self, uuid: str | None = None, error: bool = False) -> None:
        self.uuid = uuid
        self.error = error
        self.calls = 0

    def get_revision(self) -> tuple[int, str]:
        self.calls += 1
        if self.error:
            raise DatabaseError("query failed")
        return 7, self.uuid or ""


@st.composite
def _ranges(draw) -> tuple[int, int, int]:  # type: ignore[no-untyped-def]
    values = sorted(draw(st.lists(st.integers(min_value=-50, max_value=50), min_size=3, max_size=3)))
    return values[0], values[1], values[2]


def test_exit_codes_are_stable() -> None:
    assert (ExitCode.SUCCESS, ExitCode.FAILURE) == (0, 1)
    assert ExitCode.FORMAT_TOO_OLD == 20
    assert ExitCode.FORMAT_TOO_NEW == 21


def test_reference_versions_are_ordered() -> None:
    assert FORMAT_MIN <= FORMAT_MIN_ACTIVE <= FORMAT_CUR


@given(bounds=_ranges(), requested=st.integers(min_value=-60, max_value=60))
def test_property_format_decision_matches_range(bounds: tuple[int, int, int], requested: int) -> None:
    minimum, min_active, current = bounds
    outcome = check_format_version(requested, minimum, min_active, current)
    if requested > current:
        assert outcome is FormatCheck.TOO_NEW
    elif requested < minimum:
        assert outcome is FormatCheck.TOO_OLD
    elif requested < min_active:
        assert outcome is FormatCheck.DEPRECATED
    else:
        assert outcome is FormatCheck.OK


@given(bounds=_ranges())
def test_property_boundaries_are_never_fatal(bounds: tuple[int, int, int]) -> None:
    minimum, min_active, current = bounds
    for requested in bounds:
        outcome = check_format_version(requested, minimum, min_active, current)
        assert outcome not in (FormatCheck.TOO_NEW, FormatCheck.TOO_OLD)


def test_format_too_new_exits_with_dedicated_code(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        exit_if_unsupported_format(SharedOptions(format_version=FORMAT_CUR + 1))
    assert exc_info.value.code == ExitCode.FORMAT_TOO_NEW
    err = capsys.readouterr().err
    assert str(FORMAT_CUR + 1) in err
    assert str(FORMAT_CUR) in err


def test_format_too_old_exits_with_dedicated_code(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        exit_if_unsupported_format(SharedOptions(format_version=FORMAT_MIN - 1))
    assert exc_info.value.code == ExitCode.FORMAT_TOO_OLD
    assert "no longer supported" in capsys.readouterr().err


def test_deprecated_format_warns_and_continues(capsys: pytest.CaptureFixture[str]) -> None:
    exit_if_unsupported_format(SharedOptions(format_version=FORMAT_MIN))
    assert "deprecated output format version" in capsys.readouterr().err


def test_current_format_is_silent(capsys: pytest.CaptureFixture[str]) -> None:
    exit_if_unsupported_format(SharedOptions(format_version=FORMAT_CUR))
    exit_if_unsupported_format(SharedOptions(format_version=FORMAT_MIN_ACTIVE))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_uuid_gate_is_noop_without_requested_uuid() -> None:
    database = _FakeDatabase(uuid="abc")
    exit_if_unmatched_db_uuid(database, SharedOptions())  # type: ignore[arg-type]
    assert database.calls == 0


@given(requested=st.text(min_size=0, max_size=20), actual=st.text(min_size=0, max_size=20))
def test_property_uuid_gate_passes_only_on_exact_match(requested: str, actual: str) -> None:
    database = _FakeDatabase(uuid=actual)
    shared = SharedOptions(uuid=requested)
    if requested == actual:
        exit_if_unmatched_db_uuid(database, shared)  # type: ignore[arg-type]
    else:
        with pytest.raises(SystemExit) as exc_info:
            exit_if_unmatched_db_uuid(database, shared)  # type: ignore[arg-type]
        assert exc_info.value.code == ExitCode.FAILURE


def test_uuid_gate_is_case_sensitive(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        exit_if_unmatched_db_uuid(_FakeDatabase(uuid="abc"), SharedOptions(uuid="ABC"))  # type: ignore[arg-type]
    err = capsys.readouterr().err
    assert "requested database revision ABC does not match abc" in err


def test_uuid_gate_treats_query_failure_as_empty_uuid() -> None:
    database = _FakeDatabase(error=True)
    exit_if_unmatched_db_uuid(database, SharedOptions(uuid=""))  # type: ignore[arg-type]
    with pytest.raises(SystemExit):
        exit_if_unmatched_db_uuid(database, SharedOptions(uuid="abc"))  # type: ignore[arg-type]
