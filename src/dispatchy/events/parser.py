"""
Event type string parsing.

An event string holds one or more whitespace-separated tokens of the form
``name[.ns1][.ns2]...``. The name may be empty (``.ns``), which callers
interpret as "every event name carrying this namespace".

Example:
    >>> list(parse_types("some:event.ns1 another:event"))
    [ParsedType(type='some:event', namespaces=('ns1',)),
     ParsedType(type='another:event', namespaces=())]
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

_WHITESPACE = re.compile(r"\s+")

NAMESPACE_SEPARATOR = "."


@dataclass(frozen=True)
class ParsedType:
    """
    One ``name.namespace`` token split into its parts.

    Attributes:
        type: The event name, possibly empty
        namespaces: Namespace tokens in the order written, never empty strings
    """

    type: str
    namespaces: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when neither an event name nor a namespace was given."""
        return not self.type and not self.namespaces

    @property
    def namespace(self) -> str:
        """Namespace tokens joined back with dots ('' when none)."""
        return NAMESPACE_SEPARATOR.join(self.namespaces)


def normalize_type_string(value: Any) -> str:
    """Coerce an event argument to a stripped string; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip()


def parse_type(token: str) -> ParsedType:
    """Split a single token on dots into event name and namespaces."""
    name, *rest = token.split(NAMESPACE_SEPARATOR)
    return ParsedType(type=name, namespaces=tuple(ns for ns in rest if ns))


def parse_types(value: Any) -> Iterator[ParsedType]:
    """
    Lazily parse an event string into ``ParsedType`` pairs.

    Leading and trailing whitespace is ignored. An empty or whitespace-only
    string yields a single empty pair so that callers see exactly one
    (no-op) request.

    Args:
        value: The event string; None and non-strings are coerced

    Yields:
        ParsedType for every whitespace-separated token
    """
    text = normalize_type_string(value)
    if not text:
        yield ParsedType(type="")
        return
    for token in _WHITESPACE.split(text):
        yield parse_type(token)


__all__ = [
    "NAMESPACE_SEPARATOR",
    "ParsedType",
    "normalize_type_string",
    "parse_type",
    "parse_types",
]
