"""
Listener entries stored by the dispatcher.

A ListenerEntry records one registration: the event name, the callable, the
namespaces it was registered with and whether it should be dropped after it
runs once. Lifecycle hooks receive entries and may replace ``listener``
(persistent events wrap it); ``original`` keeps the callable as registered so
``off(type, fn)`` still finds the entry afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from dispatchy.exceptions import InvalidListenerError

if TYPE_CHECKING:
    from dispatchy.events.meta import EventMeta

# Listeners are called as listener(meta, payload)
Listener = Callable[["EventMeta", Any], Any]


def get_listener_name(listener: Any) -> str:
    """
    Get a descriptive name for a listener for logging and debugging.

    Args:
        listener: Any listener object (function, bound method, callable instance)

    Returns:
        String name for the listener
    """
    if hasattr(listener, "__qualname__"):
        return str(listener.__qualname__)
    elif hasattr(listener, "__name__"):
        return str(listener.__name__)
    elif hasattr(listener, "__class__"):
        return str(listener.__class__.__name__)
    else:
        return repr(listener)


def validate_listener(event_type: str, listener: Any) -> Listener:
    """
    Ensure a listener can be invoked.

    Raises:
        InvalidListenerError: If listener is not callable
    """
    if not callable(listener):
        raise InvalidListenerError(event_type, listener)
    return listener


@dataclass(eq=False)
class ListenerEntry:
    """
    One registered listener.

    Entries compare by identity, so two registrations of the same callable
    stay distinct entries.

    Attributes:
        type: Event name the listener is registered under
        listener: Callable invoked on dispatch (a hook may wrap it)
        namespaces: Namespace tokens attached at registration
        fire_once: Drop the entry after its first successful invocation
        original: The callable as passed to ``on``; used for matching in ``off``
        retain: Cleared by an ``add`` hook to keep the entry out of the
            active sequence
        spent: Set once a fire-once entry has run and been dropped
    """

    type: str
    listener: Listener
    namespaces: tuple[str, ...] = ()
    fire_once: bool = False
    original: Listener | None = field(default=None, repr=False)
    retain: bool = field(default=True, repr=False)
    spent: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if self.original is None:
            self.original = self.listener

    @property
    def name(self) -> str:
        """Descriptive name of the registered callable."""
        return get_listener_name(self.original)

    def matches_listener(self, listener: Any) -> bool:
        """True if ``listener`` is the callable this entry was registered with."""
        # Bound methods are rebuilt on every attribute access, so equality is
        # needed in addition to identity.
        return self.original is listener or self.original == listener

    def carries(self, namespaces: Iterable[str]) -> bool:
        """True if the entry was registered with every given namespace."""
        return all(ns in self.namespaces for ns in namespaces)

    def invoke(self, meta: EventMeta, payload: Any) -> Any:
        """Call the listener with ``(meta, payload)``."""
        return self.listener(meta, payload)


__all__ = [
    "Listener",
    "ListenerEntry",
    "get_listener_name",
    "validate_listener",
]
