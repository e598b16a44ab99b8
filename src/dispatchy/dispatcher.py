"""
Namespace-aware event dispatcher.

This module provides the Dispatcher, a synchronous publish/subscribe
registry. Listeners are registered per event name with optional namespaces
(``name.ns1.ns2``), fired in registration order, and can be removed by
reference, by namespace, or in bulk. Event names may carry lifecycle hooks
(see ``dispatchy.lifecycle``) that observe listeners being added and removed.

Example:
    >>> dispatcher = Dispatcher()
    >>> dispatcher.on("item:added.cart", on_item_added)
    >>> dispatcher.fire("item:added", {"sku": "A-1"})
    >>> dispatcher.off(".cart")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Self

from dispatchy.config import DispatcherConfig
from dispatchy.events.meta import EventMeta
from dispatchy.events.parser import ParsedType, normalize_type_string, parse_types
from dispatchy.lifecycle.hooks import HOOK_NAMES, LifecycleHook, LifecycleHooks
from dispatchy.lifecycle.persistent import PersistentEvent
from dispatchy.listeners.entry import Listener, ListenerEntry, validate_listener
from dispatchy.observability import Tracer, create_tracer
from dispatchy.observability.attributes import (
    ATTR_EVENT_NAMESPACE,
    ATTR_EVENT_TYPE,
    ATTR_LISTENER_COUNT,
    ATTR_LISTENER_FIRE_ONCE,
    ATTR_LISTENER_NAME,
    ATTR_LISTENER_SUCCESS,
)

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Synchronous event registry with namespaces and lifecycle hooks.

    Features:
    - Several space-separated event names per call (``"a b.ns"``)
    - Namespaces for bulk removal and scoped firing (``off(".ns")``)
    - Fire-once listeners (``one``)
    - Lifecycle hooks per event name (``register_event``)
    - Persistent events that replay their first payload
      (``register_persistent_event``)
    - A dispatch-disabled flag that turns ``fire`` into a no-op
    - Optional OpenTelemetry tracing

    Listeners are called as ``listener(meta, payload)`` where ``meta`` is an
    ``EventMeta``. The payload is passed by reference: listeners may mutate
    it and later listeners and the caller see the changes.

    Removal never mutates a stored sequence in place; it builds a fresh list
    from a snapshot and replaces the stored one. ``fire`` iterates a snapshot,
    so listeners and hooks may call back into the dispatcher.

    Example:
        >>> dispatcher = Dispatcher()
        >>> dispatcher.on("some:event.ns1 another:event.ns2", listener)
        >>> dispatcher.one("some:event", run_once)
        >>> dispatcher.fire("some:event", {"id": 1})
        >>> dispatcher.off(".ns1")

    Thread Safety:
        Not thread-safe. A dispatcher belongs to one thread of control.
    """

    def __init__(
        self,
        *,
        config: DispatcherConfig | None = None,
        tracer: Tracer | None = None,
        enable_tracing: bool | None = None,
    ) -> None:
        """
        Initialize the dispatcher with empty registries.

        Args:
            config: Behavioural configuration. Defaults to DispatcherConfig().
            tracer: Optional custom Tracer instance. If not provided, one is
                   created based on enable_tracing.
            enable_tracing: Overrides config.enable_tracing when given.
                          Ignored if tracer is explicitly provided.
        """
        self._config = config or DispatcherConfig()
        if enable_tracing is None:
            enable_tracing = self._config.enable_tracing

        # Map of event name -> entries; None marks a type cleared by a bulk off
        self._listeners: dict[str, list[ListenerEntry] | None] = {}
        # Map of event name -> lifecycle hooks
        self._custom_events: dict[str, LifecycleHooks] = {}
        self._persistent_events: dict[str, PersistentEvent] = {}

        # When set, fire() returns immediately without invoking anything
        self.disabled: bool = self._config.disabled

        self._stats = {
            "events_fired": 0,
            "listeners_invoked": 0,
            "listener_errors": 0,
            "listeners_added": 0,
            "listeners_removed": 0,
        }

        self._tracer = tracer or create_tracer(__name__, enable_tracing)

    @property
    def config(self) -> DispatcherConfig:
        """The configuration this dispatcher was created with."""
        return self._config

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(
        self,
        event_type: str | Mapping[str, Listener],
        listener: Listener | None = None,
        fire_once: bool = False,
    ) -> Self:
        """
        Register a listener for one or more event names.

        Args:
            event_type: Space-separated event names with optional namespaces,
                e.g. ``"some:event"``, ``"a:event b:event"``,
                ``"some:event.ns1 another:event.ns2"``. A mapping of such
                strings to listeners is forwarded to ``on_map``.
            listener: Callable invoked as ``listener(meta, payload)``
            fire_once: Drop the listener after it runs once. Prefer ``one``.

        Returns:
            The dispatcher, for chaining

        Raises:
            InvalidListenerError: If listener is not callable
        """
        if isinstance(event_type, Mapping):
            return self.on_map(event_type, fire_once=fire_once)

        validate_listener(normalize_type_string(event_type), listener)
        for parsed in parse_types(event_type):
            self._add_listener(parsed, listener, fire_once)  # type: ignore[arg-type]
        return self

    def on_map(
        self,
        listeners: Mapping[str, Listener],
        fire_once: bool = False,
    ) -> Self:
        """
        Register several listeners given as ``{event string: listener}``.

        Every listener is validated before any of them is registered, so an
        invalid value leaves the dispatcher untouched.

        Raises:
            InvalidListenerError: If any listener is not callable
        """
        for event_type, listener in listeners.items():
            validate_listener(event_type, listener)

        for event_type, listener in listeners.items():
            for parsed in parse_types(event_type):
                self._add_listener(parsed, listener, fire_once)
        return self

    def one(
        self,
        event_type: str | Mapping[str, Listener],
        listener: Listener | None = None,
    ) -> Self:
        """Register a listener that is dropped after it runs once."""
        return self.on(event_type, listener, fire_once=True)

    def _add_listener(self, parsed: ParsedType, listener: Listener, fire_once: bool) -> None:
        if parsed.is_empty:
            return

        name = parsed.type
        entry = ListenerEntry(
            type=name,
            listener=listener,
            namespaces=parsed.namespaces,
            fire_once=fire_once,
        )

        hooks = self._custom_events.get(name)
        if hooks is not None:
            if not self._listeners.get(name):
                hooks.notify("setup", entry)
            hooks.notify("add", entry)

        if not entry.retain:
            logger.debug(
                f"Listener {entry.name} for {name} was consumed by its add hook",
                extra={"listener": entry.name, "event_type": name},
            )
            return

        # Re-read the sequence: a hook may have registered listeners itself
        self._listeners[name] = [*(self._listeners.get(name) or []), entry]
        self._stats["listeners_added"] += 1

        logger.debug(
            f"Registered listener {entry.name} for {name}",
            extra={
                "listener": entry.name,
                "event_type": name,
                "namespaces": list(entry.namespaces),
                "fire_once": fire_once,
            },
        )

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def off(self, event_type: str = "", listener: Listener | None = None) -> Self:
        """
        Remove listeners.

        Selection per event name:
        - no listener, no namespace: every entry is removed and the name is
          marked as cleared
        - listener only: entries registered with that listener
        - listener and namespace: entries registered with that listener and
          carrying the namespace
        - namespace only: entries carrying the namespace

        An empty event name (``".ns"`` or ``""``) applies the selection to
        every known event name. Removing something that is not registered is
        a silent no-op.

        Args:
            event_type: Space-separated event names with optional namespaces
            listener: The listener to remove (compared against the callable
                originally passed to ``on``)

        Returns:
            The dispatcher, for chaining
        """
        for parsed in parse_types(event_type):
            if parsed.type:
                self._remove_listeners(parsed.type, parsed.namespaces, listener)
                continue
            for name in list(self._listeners):
                self._remove_listeners(name, parsed.namespaces, listener)
        return self

    def _remove_listeners(
        self,
        name: str,
        namespaces: tuple[str, ...],
        listener: Listener | None,
    ) -> None:
        snapshot = self._listeners.get(name)
        if snapshot is None:
            return

        hooks = self._custom_events.get(name)

        if listener is None and not namespaces:
            self._listeners[name] = None
            self._stats["listeners_removed"] += len(snapshot)
            logger.debug(
                f"Cleared {len(snapshot)} listener(s) for {name}",
                extra={"event_type": name, "removed": len(snapshot)},
            )
            if hooks is not None and snapshot:
                for entry in snapshot:
                    hooks.notify("remove", entry)
                hooks.notify("teardown", snapshot[-1])
            return

        kept: list[ListenerEntry] = []
        removed: list[ListenerEntry] = []
        for entry in snapshot:
            if self._selects(entry, namespaces, listener):
                removed.append(entry)
            else:
                kept.append(entry)

        self._listeners[name] = kept
        if not removed:
            return

        self._stats["listeners_removed"] += len(removed)
        logger.debug(
            f"Removed {len(removed)} listener(s) for {name}",
            extra={
                "event_type": name,
                "namespaces": list(namespaces),
                "removed": len(removed),
            },
        )

        if hooks is not None:
            for entry in removed:
                hooks.notify("remove", entry)
            if not kept:
                hooks.notify("teardown", snapshot[-1])

    @staticmethod
    def _selects(
        entry: ListenerEntry,
        namespaces: tuple[str, ...],
        listener: Listener | None,
    ) -> bool:
        if listener is not None and not entry.matches_listener(listener):
            return False
        return entry.carries(namespaces)

    def clear_listeners(self) -> None:
        """
        Drop every listener without running lifecycle hooks.

        Registered lifecycle hooks and persistent event state are kept.
        Useful for testing or reinitializing the dispatcher.
        """
        self._listeners.clear()
        logger.info("All listeners cleared")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def fire(self, event_type: str, payload: Any = None) -> Self:
        """
        Invoke the listeners registered for the given event names.

        With a namespace (``"some:event.ns"``) only entries carrying that
        namespace run; with only a namespace (``".ns"``) every event name is
        searched. Listeners run synchronously in registration order.
        A fire-once listener is dropped as soon as it has run, so neither a
        later listener in the same pass nor a nested ``fire`` sees it again.

        Does nothing while ``disabled`` is set.

        Args:
            event_type: Space-separated event names with optional namespaces
            payload: Passed by reference to every listener

        Returns:
            The dispatcher, for chaining

        Raises:
            Exception: Whatever a listener raises, unless the dispatcher was
                configured with ``isolate_listener_errors=True``
        """
        if self.disabled:
            return self

        for parsed in parse_types(event_type):
            if parsed.is_empty:
                continue
            self._stats["events_fired"] += 1
            names = [parsed.type] if parsed.type else list(self._listeners)
            dispatched = False
            for name in names:
                dispatched = self._dispatch(name, parsed.namespaces, payload) or dispatched
            if not dispatched:
                logger.debug(
                    f"No listeners registered for {parsed.type or '*'}",
                    extra={"event_type": parsed.type, "namespaces": list(parsed.namespaces)},
                )
        return self

    def _dispatch(self, name: str, namespaces: tuple[str, ...], payload: Any) -> bool:
        """Run the matching listeners of one event name; False if none matched."""
        snapshot = self._listeners.get(name)
        matching = [entry for entry in snapshot or () if entry.carries(namespaces)]
        if not matching:
            return False

        meta = EventMeta(type=name, namespaces=namespaces)

        logger.debug(
            f"Dispatching {meta} to {len(matching)} listener(s)",
            extra={
                "event_type": name,
                "namespaces": list(namespaces),
                "listener_count": len(matching),
            },
        )

        with self._tracer.span(
            "dispatchy.dispatch",
            {
                ATTR_EVENT_TYPE: name,
                ATTR_EVENT_NAMESPACE: meta.namespace,
                ATTR_LISTENER_COUNT: len(matching),
            },
        ):
            for entry in matching:
                # A re-entrant fire may already have consumed this entry
                if entry.spent:
                    continue
                if self._invoke(entry, meta, payload) and entry.fire_once:
                    self._drop_spent(name, entry)
        return True

    def _invoke(self, entry: ListenerEntry, meta: EventMeta, payload: Any) -> bool:
        """Run one listener; returns False if it failed and errors are isolated."""
        with self._tracer.span(
            "dispatchy.listener",
            {
                ATTR_EVENT_TYPE: meta.type,
                ATTR_LISTENER_NAME: entry.name,
                ATTR_LISTENER_FIRE_ONCE: entry.fire_once,
            },
        ) as span:
            try:
                entry.invoke(meta, payload)
            except Exception as e:
                if span:
                    span.set_attribute(ATTR_LISTENER_SUCCESS, False)
                    span.record_exception(e)
                self._stats["listener_errors"] += 1
                if not self._config.isolate_listener_errors:
                    raise
                logger.error(
                    f"Listener {entry.name} failed processing {meta}: {e}",
                    exc_info=True,
                    extra={
                        "listener": entry.name,
                        "event_type": meta.type,
                        "namespaces": list(meta.namespaces),
                        "error": str(e),
                    },
                )
                return False

            if span:
                span.set_attribute(ATTR_LISTENER_SUCCESS, True)
            self._stats["listeners_invoked"] += 1
            return True

    def _drop_spent(self, name: str, consumed: ListenerEntry) -> None:
        # Filter the current sequence, not the snapshot, so that listeners
        # added or removed while dispatching are kept as they are.
        consumed.spent = True
        current = self._listeners.get(name)
        if current is None:
            return
        self._listeners[name] = [entry for entry in current if entry is not consumed]
        logger.debug(
            f"Dropped fire-once listener {consumed.name} for {name}",
            extra={"event_type": name, "listener": consumed.name},
        )

    # ------------------------------------------------------------------
    # Custom events
    # ------------------------------------------------------------------

    def register_event(
        self,
        event_type: str,
        lifecycle: LifecycleHooks | Mapping[str, LifecycleHook | None],
    ) -> None:
        """
        Attach lifecycle hooks to an event name.

        Replaces hooks previously registered for the same name. The hooks
        stay registered while listeners come and go.

        Args:
            event_type: The event name (without namespaces)
            lifecycle: LifecycleHooks, or a mapping with any of the keys
                ``setup``, ``add``, ``remove``, ``teardown``

        Raises:
            InvalidLifecycleError: On an unknown key or non-callable hook
        """
        name = normalize_type_string(event_type)
        hooks = LifecycleHooks.coerce(name, lifecycle)
        self._custom_events[name] = hooks
        logger.info(
            f"Registered lifecycle hooks for {name}",
            extra={
                "event_type": name,
                "hooks": [hook for hook in HOOK_NAMES if getattr(hooks, hook) is not None],
            },
        )

    def register_persistent_event(self, event_type: str) -> None:
        """
        Make an event name replay its first dispatch to later listeners.

        Listeners added before the first ``fire`` run at fire time. Listeners
        added afterwards run immediately inside ``on`` with the first
        dispatch's metadata and payload, and are not kept.

        Args:
            event_type: The event name (without namespaces)
        """
        name = normalize_type_string(event_type)
        persistent = PersistentEvent(name)
        self._persistent_events[name] = persistent
        self.register_event(name, persistent.hooks())
        self.one(name, persistent.sentinel())

    def get_lifecycle(self, event_type: str) -> LifecycleHooks | None:
        """Get the lifecycle hooks registered for an event name, if any."""
        return self._custom_events.get(normalize_type_string(event_type))

    def get_persistent_event(self, event_type: str) -> PersistentEvent | None:
        """Get the persistent event state for an event name, if registered."""
        return self._persistent_events.get(normalize_type_string(event_type))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def listeners(self) -> dict[str, tuple[ListenerEntry, ...] | None]:
        """
        Snapshot of the listener store.

        Names cleared by a bulk ``off`` map to None; names whose entries were
        all removed by a filtered ``off`` map to an empty tuple; names never
        registered are absent.
        """
        return {
            name: None if entries is None else tuple(entries)
            for name, entries in self._listeners.items()
        }

    def get_listeners(self, event_type: str) -> list[ListenerEntry]:
        """Get a copy of the entries registered for an event name."""
        return list(self._listeners.get(event_type) or ())

    def listener_count(self, event_type: str | None = None) -> int:
        """
        Get the number of registered listeners.

        Args:
            event_type: If provided, count listeners for this event name only.

        Returns:
            Number of registered listeners
        """
        if event_type is None:
            return sum(len(entries or ()) for entries in self._listeners.values())
        return len(self._listeners.get(event_type) or ())

    def has_listeners(self, event_type: str) -> bool:
        """True if at least one listener is registered for the event name."""
        return bool(self._listeners.get(event_type))

    def is_cleared(self, event_type: str) -> bool:
        """True if the event name was emptied by a bulk ``off``."""
        return event_type in self._listeners and self._listeners[event_type] is None

    def event_types(self) -> list[str]:
        """Event names known to the store, in first-registration order."""
        return list(self._listeners)

    def get_stats(self) -> dict[str, int]:
        """
        Get statistics about dispatcher operation.

        Returns:
            Dictionary with counts:
            - events_fired: Parsed event tokens dispatched
            - listeners_invoked: Successful listener invocations
            - listener_errors: Listener invocations that raised
            - listeners_added: Entries added to the store
            - listeners_removed: Entries removed by ``off``
        """
        return dict(self._stats)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    def create(self) -> Dispatcher:
        """
        Create an independent dispatcher.

        The new instance shares this one's configuration and tracer but has
        its own empty listener and lifecycle registries.
        """
        return type(self)(config=self._config, tracer=self._tracer)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(event_types={len(self._listeners)}, "
            f"listeners={self.listener_count()}, disabled={self.disabled})"
        )


def create(
    *,
    config: DispatcherConfig | None = None,
    tracer: Tracer | None = None,
) -> Dispatcher:
    """Create a new dispatcher with empty state."""
    return Dispatcher(config=config, tracer=tracer)


__all__ = ["Dispatcher", "create"]
