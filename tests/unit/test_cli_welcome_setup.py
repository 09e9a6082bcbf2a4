"""Unit tests for the default command and mailroom setup."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
import typer
import yaml

from mailroom.cli import run
from mailroom.cli.gates import ExitCode
from mailroom.db import index_file, open_database


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    replies = {
        "Your full name": "Grace Hopper",
        "Your primary email address": "grace@example.org",
        "Top-level directory of your email archive": str(tmp_path / "archive"),
    }

    def _fake_prompt(text: str, default=None, **kwargs):  # type: ignore[no-untyped-def]
        return replies[text]

    monkeypatch.setattr("mailroom.cli.setup.typer.prompt", _fake_prompt)
    return replies


def test_first_run_goes_through_setup(
    isolated_env: Path, answers: dict[str, str], capsys: pytest.CaptureFixture[str]
) -> None:
    assert run([]) == 0
    out = capsys.readouterr().out
    assert "Welcome to mailroom!" in out
    saved = yaml.safe_load((isolated_env / ".mailroom.yaml").read_text(encoding="utf-8"))
    assert saved["user"]["name"] == "Grace Hopper"
    assert saved["database"]["path"] == answers["Top-level directory of your email archive"]
    assert index_file(answers["Top-level directory of your email archive"]).is_file()


def test_setup_keeps_existing_database(
    config_file: Path, db_uuid: str, mail_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        "mailroom.cli.setup.typer.prompt",
        lambda text, default=None, **kwargs: default,
    )
    assert run([f"--config={config_file}", "setup"]) == 0
    database = open_database(mail_dir)
    try:
        assert database.get_revision()[1] == db_uuid
    finally:
        database.close()


def test_setup_rejects_bad_option(config_file: Path) -> None:
    assert run([f"--config={config_file}", "setup", "--bogus"]) == ExitCode.FAILURE


def test_configured_without_database_suggests_setup(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert run([f"--config={config_file}"]) == 0
    out = capsys.readouterr().out
    assert "there's not yet a database" in out


def test_configured_with_database_greets_user(
    config_file: Path, db_uuid: str, capsys: pytest.CaptureFixture[str]
) -> None:
    assert run([f"--config={config_file}"]) == 0
    out = capsys.readouterr().out
    assert "appears to have a database" in out
    assert "Ada Lovelace <ada@example.org>" in out


def test_setup_rejects_positional_argument(
    config_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _unexpected_prompt(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise AssertionError("setup prompted despite a bad argument")

    monkeypatch.setattr("mailroom.cli.setup.typer.prompt", _unexpected_prompt)
    assert run([f"--config={config_file}", "setup", "foo"]) == ExitCode.FAILURE
    assert "mailroom setup takes no arguments (got 'foo')" in capsys.readouterr().err


def test_first_run_with_closed_stdin_aborts_cleanly(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    target = tmp_path / "new.yaml"
    assert run([f"--config={target}"]) == ExitCode.FAILURE
    assert "Aborted!" in capsys.readouterr().err
    assert not target.exists()


def test_interrupted_setup_prompt_aborts_cleanly(
    config_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _interrupted(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise typer.Abort()

    monkeypatch.setattr("mailroom.cli.setup.typer.prompt", _interrupted)
    before = config_file.read_text(encoding="utf-8")
    assert run([f"--config={config_file}", "setup"]) == ExitCode.FAILURE
    assert "Aborted!" in capsys.readouterr().err
    assert config_file.read_text(encoding="utf-8") == before
