"""
Lifecycle hooks for custom events.

A custom event is an event name with a set of callbacks that the dispatcher
invokes while listeners for that name are added and removed:

- ``setup(entry)``: the first listener is added (zero to one)
- ``add(entry)``: every listener added, after ``setup`` for the first one
- ``remove(entry)``: every listener removed
- ``teardown(entry)``: the last listener is removed (one to zero); receives
  the last entry present before the removal

All hooks are optional and run synchronously inside ``on``/``off``.

Example:
    >>> hooks = LifecycleHooks(setup=lambda entry: print("first", entry.type))
    >>> dispatcher.register_event("app:ready", hooks)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from dispatchy.exceptions import InvalidLifecycleError
from dispatchy.listeners.entry import ListenerEntry

logger = logging.getLogger(__name__)

LifecycleHook = Callable[[ListenerEntry], Any]

HOOK_NAMES = ("setup", "add", "remove", "teardown")


@dataclass(frozen=True)
class LifecycleHooks:
    """
    The optional callbacks of a custom event.

    Attributes:
        setup: Called with the first entry added for the event
        add: Called with every entry added for the event
        remove: Called with every entry removed from the event
        teardown: Called with the last entry when the event loses its last listener
    """

    setup: LifecycleHook | None = None
    add: LifecycleHook | None = None
    remove: LifecycleHook | None = None
    teardown: LifecycleHook | None = None

    @classmethod
    def coerce(
        cls,
        event_type: str,
        lifecycle: LifecycleHooks | Mapping[str, LifecycleHook | None],
    ) -> LifecycleHooks:
        """
        Build hooks from a LifecycleHooks instance or a mapping of hook names.

        Raises:
            InvalidLifecycleError: On an unknown hook name or a non-callable hook
        """
        if isinstance(lifecycle, LifecycleHooks):
            hooks = {f.name: getattr(lifecycle, f.name) for f in fields(cls)}
        elif isinstance(lifecycle, Mapping):
            hooks = dict(lifecycle)
        else:
            raise InvalidLifecycleError(
                event_type,
                "<lifecycle>",
                f"expected LifecycleHooks or a mapping, got {type(lifecycle).__name__}",
            )

        for name, hook in hooks.items():
            if name not in HOOK_NAMES:
                raise InvalidLifecycleError(
                    event_type, name, f"unknown hook, expected one of {', '.join(HOOK_NAMES)}"
                )
            if hook is not None and not callable(hook):
                raise InvalidLifecycleError(event_type, name, "hook must be callable")

        return cls(**hooks)

    def notify(self, hook_name: str, entry: ListenerEntry) -> None:
        """Invoke the named hook with ``entry`` if it is set."""
        hook = getattr(self, hook_name)
        if hook is None:
            return
        logger.debug(
            f"Running {hook_name} hook for {entry.type}",
            extra={
                "hook": hook_name,
                "event_type": entry.type,
                "listener": entry.name,
            },
        )
        hook(entry)


__all__ = [
    "HOOK_NAMES",
    "LifecycleHook",
    "LifecycleHooks",
]
