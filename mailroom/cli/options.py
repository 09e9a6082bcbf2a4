"""Declarative option descriptors and the argv parser shared by every subcommand."""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OptionError(ValueError):
    """Raised when argv holds a malformed or unrecognized option."""


class OptionKind(Enum):
    """What an option consumes."""

    BOOLEAN = "boolean"
    INT = "int"
    STRING = "string"
    KEYWORD = "keyword"
    INHERIT = "inherit"


@dataclass(frozen=True)
class OptionDesc:
    """One recognized option, or a reference to another descriptor list."""

    kind: OptionKind
    name: str = ""
    dest: str = ""
    keywords: Mapping[str, Any] = field(default_factory=dict)
    inherit: tuple[OptionDesc, ...] = ()

    @classmethod
    def boolean(cls, name: str, dest: str | None = None) -> OptionDesc:
        return cls(OptionKind.BOOLEAN, name, dest or _dest_for(name))

    @classmethod
    def integer(cls, name: str, dest: str | None = None) -> OptionDesc:
        return cls(OptionKind.INT, name, dest or _dest_for(name))

    @classmethod
    def string(cls, name: str, dest: str | None = None) -> OptionDesc:
        return cls(OptionKind.STRING, name, dest or _dest_for(name))

    @classmethod
    def keyword(cls, name: str, keywords: Mapping[str, Any], dest: str | None = None) -> OptionDesc:
        return cls(OptionKind.KEYWORD, name, dest or _dest_for(name), keywords=dict(keywords))

    @classmethod
    def inherit_from(cls, options: Sequence[OptionDesc]) -> OptionDesc:
        return cls(OptionKind.INHERIT, inherit=tuple(options))

    @property
    def takes_value(self) -> bool:
        return self.kind not in (OptionKind.BOOLEAN, OptionKind.INHERIT)


def _dest_for(name: str) -> str:
    return name.replace("-", "_")


def flatten(options: Sequence[OptionDesc]) -> list[OptionDesc]:
    """Expand INHERIT entries in place; inherited descriptors come first at their position."""
    flat: list[OptionDesc] = []
    for desc in options:
        if desc.kind is OptionKind.INHERIT:
            flat.extend(flatten(desc.inherit))
        else:
            flat.append(desc)
    return flat


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as OptionError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise OptionError(message)


def _add_descriptors(parser: argparse.ArgumentParser, options: Sequence[OptionDesc]) -> None:
    for desc in options:
        flag = f"--{desc.name}"
        if desc.kind is OptionKind.BOOLEAN:
            parser.add_argument(flag, dest=desc.dest, action="store_true", default=argparse.SUPPRESS)
        elif desc.kind is OptionKind.INT:
            parser.add_argument(flag, dest=desc.dest, type=int, default=argparse.SUPPRESS)
        elif desc.kind is OptionKind.STRING:
            parser.add_argument(flag, dest=desc.dest, default=argparse.SUPPRESS)
        elif desc.kind is OptionKind.KEYWORD:
            parser.add_argument(
                flag,
                dest=desc.dest,
                choices=list(desc.keywords),
                default=argparse.SUPPRESS,
            )


def _build_parser(options: Sequence[OptionDesc]) -> argparse.ArgumentParser:
    # Inherited lists become argparse parents so a name defined twice fails loudly.
    parents: list[argparse.ArgumentParser] = []
    own: list[OptionDesc] = []
    for desc in options:
        if desc.kind is OptionKind.INHERIT:
            parents.append(_build_parser(desc.inherit))
        else:
            own.append(desc)
    parser = _OptionParser(add_help=False, allow_abbrev=False, parents=parents)
    _add_descriptors(parser, own)
    return parser


def _split_index(argv: Sequence[str], start: int, by_name: Mapping[str, OptionDesc]) -> int:
    """Return the index of the first non-option token at or after ``start``."""
    i = start
    while i < len(argv):
        token = argv[i]
        if token == "--":
            return i + 1
        if token == "-" or not token.startswith("-"):
            return i
        name, has_value, _ = token.lstrip("-").partition("=")
        desc = by_name.get(name)
        if desc is not None and desc.takes_value and not has_value:
            i += 1
        i += 1
    return min(i, len(argv))


def parse_arguments(
    argv: Sequence[str],
    options: Sequence[OptionDesc],
    start: int = 0,
) -> tuple[int, dict[str, Any]]:
    """Parse the leading options of ``argv[start:]`` against ``options``.

    Returns ``(index, values)``: ``index`` is the position of the first
    non-option argument and ``values`` holds only the options that were given.

    Raises:
        OptionError: an option is unrecognized, lacks its value or has a bad value.
    """
    flat = flatten(options)
    by_name = {desc.name: desc for desc in flat}
    index = _split_index(argv, start, by_name)
    prefix = list(argv[start:index])
    if prefix and index > start and argv[index - 1] == "--":
        prefix.pop()

    namespace = _build_parser(options).parse_args(prefix)
    values = vars(namespace)
    for desc in flat:
        if desc.kind is OptionKind.KEYWORD and desc.dest in values:
            values[desc.dest] = desc.keywords[values[desc.dest]]
    return index, values
