"""YAML configuration loader utilities."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]


class ConfigError(Exception):
    """Base exception for configuration handling."""


class ConfigLoadError(ConfigError, ValueError):
    """Raised when configuration YAML cannot be read or parsed."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is missing and may not be created."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Configuration file {path} not found.\n"
            "Try running 'mailroom setup' to create a configuration."
        )


class YAMLConfigLoader:
    """Load and store the mailroom configuration file."""

    DEFAULT_FILENAME = ".mailroom.yaml"
    ENV_VAR = "MAILROOM_CONFIG"

    @classmethod
    def resolve_path(cls, cli_path: str | None = None) -> Path:
        """Resolve config path by priority: cli -> env -> home default."""
        if cli_path and cli_path.strip():
            return Path(cli_path.strip()).expanduser()
        env_path = os.environ.get(cls.ENV_VAR, "").strip()
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / cls.DEFAULT_FILENAME

    @classmethod
    def load_dict(cls, path: Path) -> dict[str, Any]:
        """Load YAML into dict. Empty file yields empty dict."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigLoadError(f"Error reading configuration file {path}: {exc.strerror or exc}") from exc
        if not text.strip():
            return {}
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                raise ConfigLoadError(
                    f"Invalid YAML at {path}:{mark.line + 1}:{mark.column + 1}"
                ) from exc
            raise ConfigLoadError(f"Invalid YAML at {path}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config root must be mapping: {path}")
        return data

    @classmethod
    def save_dict(cls, path: Path, data: dict[str, Any]) -> None:
        """Write ``data`` as YAML, replacing ``path`` atomically."""
        text = yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
