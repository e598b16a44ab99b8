"""Listener entries and listener validation."""

from dispatchy.listeners.entry import (
    Listener,
    ListenerEntry,
    get_listener_name,
    validate_listener,
)

__all__ = [
    "Listener",
    "ListenerEntry",
    "get_listener_name",
    "validate_listener",
]
