"""Configuration models for mailroom."""

from __future__ import annotations

import getpass
import socket
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


def _default_user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def _default_email() -> str:
    name = _default_user_name() or "user"
    return f"{name}@{socket.getfqdn() or 'localhost'}"


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DatabaseConfig(_Section):
    """Where the mail store and its index live."""

    path: str = Field(default_factory=lambda: str(Path.home() / "mail"))


class UserConfig(_Section):
    """Identity used in greetings and replies."""

    name: str = Field(default_factory=_default_user_name)
    primary_email: str = Field(default_factory=_default_email)
    other_email: list[str] = Field(default_factory=list)


class NewConfig(_Section):
    """Tags applied to newly indexed messages."""

    tags: list[str] = Field(default_factory=lambda: ["unread", "inbox"])
    ignore: list[str] = Field(default_factory=list)


class SearchConfig(_Section):
    """Search defaults."""

    exclude_tags: list[str] = Field(default_factory=lambda: ["deleted", "spam"])


class MailroomConfig(_Section):
    """Root configuration model for mailroom."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    new: NewConfig = Field(default_factory=NewConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
