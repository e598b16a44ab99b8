"""
Persistent events.

A persistent event remembers the arguments of its first dispatch. Listeners
added before that dispatch run at fire time as usual; listeners added after
it run immediately, during ``on``, with the remembered arguments and are not
kept for later dispatches.

Example:
    >>> dispatcher.register_persistent_event("component:ready")
    >>> dispatcher.fire("component:ready", {"id": 1})
    >>> dispatcher.on("component:ready", lambda meta, payload: print(payload))
    {'id': 1}
"""

from __future__ import annotations

import logging
from typing import Any

from dispatchy.events.meta import EventMeta
from dispatchy.lifecycle.hooks import LifecycleHooks
from dispatchy.listeners.entry import Listener, ListenerEntry

logger = logging.getLogger(__name__)


def _noop(meta: EventMeta, payload: Any) -> None:
    return None


class PersistentEvent:
    """
    Hook state backing a persistent event.

    The ``add`` hook wraps every listener added before the first dispatch.
    The first wrapped listener to run captures ``(meta, payload)``; every
    wrapped listener then runs with the captured arguments, so a second
    ``fire`` still replays the first payload.

    A fire-once no-op sentinel is registered by the dispatcher right after
    the hooks are installed, so the arguments are captured even if every
    real listener has been removed. Listeners registered before the event
    was made persistent are not wrapped: they run with each dispatch's own
    arguments, and the sentinel comes after them in the sequence.

    Attributes:
        event_type: The event name this state belongs to
    """

    def __init__(self, event_type: str) -> None:
        self.event_type = event_type
        self._fired = False
        self._meta: EventMeta | None = None
        self._payload: Any = None

    @property
    def fired(self) -> bool:
        """True once the event has been dispatched."""
        return self._fired

    @property
    def meta(self) -> EventMeta | None:
        """Metadata captured from the first dispatch."""
        return self._meta

    @property
    def payload(self) -> Any:
        """Payload captured from the first dispatch."""
        return self._payload

    @staticmethod
    def sentinel() -> Listener:
        """The no-op listener registered when the event is installed."""
        return _noop

    def hooks(self) -> LifecycleHooks:
        """Lifecycle hooks to register for the event."""
        return LifecycleHooks(add=self.add)

    def add(self, entry: ListenerEntry) -> None:
        """``add`` hook: replay to late listeners, wrap early ones."""
        if self._fired:
            logger.debug(
                f"Replaying {self.event_type} to late listener {entry.name}",
                extra={"event_type": self.event_type, "listener": entry.name},
            )
            entry.retain = False
            entry.listener(self._meta, self._payload)
            return

        entry.listener = self._wrap(entry.listener)

    def _capture(self, meta: EventMeta, payload: Any) -> None:
        if self._fired:
            return
        self._fired = True
        self._meta = meta
        self._payload = payload

    def _wrap(self, listener: Listener) -> Listener:
        def persistent_listener(meta: EventMeta, payload: Any) -> Any:
            self._capture(meta, payload)
            return listener(self._meta, self._payload)

        persistent_listener.__wrapped__ = listener  # type: ignore[attr-defined]
        return persistent_listener


__all__ = ["PersistentEvent"]
