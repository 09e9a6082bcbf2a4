"""Configuration file handling for mailroom."""

from mailroom.config.handle import ConfigHandle, open_config
from mailroom.config.loader import (
    ConfigError,
    ConfigLoadError,
    ConfigNotFoundError,
    YAMLConfigLoader,
)
from mailroom.config.models import (
    DatabaseConfig,
    MailroomConfig,
    NewConfig,
    SearchConfig,
    UserConfig,
)

__all__ = [
    "ConfigError",
    "ConfigHandle",
    "ConfigLoadError",
    "ConfigNotFoundError",
    "DatabaseConfig",
    "MailroomConfig",
    "NewConfig",
    "SearchConfig",
    "UserConfig",
    "YAMLConfigLoader",
    "open_config",
]
