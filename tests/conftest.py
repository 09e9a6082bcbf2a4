"""Shared test fixtures for mailroom."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mailroom.db import create_database


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point HOME at a scratch directory and clear mailroom environment variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in ("MAILROOM_CONFIG", "MAILROOM_TRACEMALLOC_REPORT", "MAILROOM_MAN"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def mail_dir(tmp_path: Path) -> Path:
    path = tmp_path / "mail"
    path.mkdir()
    return path


@pytest.fixture
def config_file(tmp_path: Path, mail_dir: Path) -> Path:
    """A configuration file pointing at ``mail_dir`` (no database yet)."""
    path = tmp_path / "mailroom.yaml"
    data = {
        "database": {"path": str(mail_dir)},
        "user": {"name": "Ada Lovelace", "primary_email": "ada@example.org"},
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture
def db_uuid(mail_dir: Path) -> str:
    """Create the database under ``mail_dir`` and return its uuid."""
    database = create_database(mail_dir)
    try:
        _, value = database.get_revision()
    finally:
        database.close()
    return value
