"""The configuration handle owned by the main dispatcher for one invocation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mailroom.config.loader import ConfigError, ConfigLoadError, ConfigNotFoundError, YAMLConfigLoader
from mailroom.config.models import MailroomConfig

logger = logging.getLogger(__name__)


def _set_path(target: dict[str, Any], path: str, value: Any) -> None:
    parts = [p for p in path.split(".") if p]
    cursor = target
    for part in parts[:-1]:
        existing = cursor.get(part)
        if not isinstance(existing, dict):
            existing = {}
            cursor[part] = existing
        cursor = existing
    cursor[parts[-1]] = value


def _split_key(key: str) -> tuple[str, str]:
    section, dot, item = key.partition(".")
    if not dot or not section or not item or "." in item:
        raise ConfigError(f"Invalid configuration key '{key}' (expected section.item).")
    return section, item


class ConfigHandle:
    """A loaded (or freshly created) configuration file."""

    def __init__(self, path: Path, config: MailroomConfig, is_new: bool) -> None:
        self.path = path
        self.config = config
        self.is_new = is_new
        self.closed = False

    def get(self, key: str) -> Any:
        """Return the value stored under ``section.item``."""
        section, item = _split_key(key)
        data = self.config.model_dump(mode="python")
        if section not in data or item not in data[section]:
            raise ConfigError(f"Unknown configuration key '{key}'.")
        return data[section][item]

    def set(self, key: str, values: list[str]) -> None:
        """Store ``values`` under ``section.item``; scalar items take exactly one value."""
        current = self.get(key)
        if isinstance(current, list):
            value: Any = list(values)
        elif len(values) == 1:
            value = values[0]
        else:
            raise ConfigError(f"Configuration key '{key}' takes exactly one value.")
        data = self.config.model_dump(mode="python")
        _set_path(data, key, value)
        try:
            self.config = MailroomConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for '{key}': {exc.errors()[0]['msg']}") from exc

    def items(self) -> list[tuple[str, Any]]:
        """Flatten the configuration to ``(section.item, value)`` pairs."""
        pairs: list[tuple[str, Any]] = []
        for section, values in self.config.model_dump(mode="python").items():
            for item, value in values.items():
                pairs.append((f"{section}.{item}", value))
        return pairs

    def save(self) -> None:
        YAMLConfigLoader.save_dict(self.path, self.config.model_dump(mode="python"))
        self.is_new = False
        logger.debug("saved configuration to %s", self.path)

    def close(self) -> None:
        self.closed = True
        logger.debug("closed configuration %s", self.path)


def open_config(path: str | None = None, create: bool = False) -> ConfigHandle:
    """Open the configuration file, or start a new one in memory when ``create`` is set.

    A newly created configuration is not written until :meth:`ConfigHandle.save`.

    Raises:
        ConfigNotFoundError: the file does not exist and ``create`` is false.
        ConfigLoadError: the file cannot be read, parsed or validated.
    """
    target = YAMLConfigLoader.resolve_path(path)
    if not target.exists():
        if not create:
            raise ConfigNotFoundError(target)
        logger.debug("configuration %s missing, starting from defaults", target)
        return ConfigHandle(target, MailroomConfig(), is_new=True)
    data = YAMLConfigLoader.load_dict(target)
    try:
        config = MailroomConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid configuration in {target}: {exc}") from exc
    logger.debug("loaded configuration from %s", target)
    return ConfigHandle(target, config, is_new=False)
