"""Event string parsing and dispatch metadata."""

from dispatchy.events.meta import EventMeta
from dispatchy.events.parser import (
    NAMESPACE_SEPARATOR,
    ParsedType,
    normalize_type_string,
    parse_type,
    parse_types,
)

__all__ = [
    "EventMeta",
    "NAMESPACE_SEPARATOR",
    "ParsedType",
    "normalize_type_string",
    "parse_type",
    "parse_types",
]
