"""
Mixin that gives any class an event API.

Host classes inherit chainable ``on``/``one``/``off``/``fire`` methods backed
by a Dispatcher created on first use. Each host instance owns its own
dispatcher; nothing is shared between instances.

Example:
    >>> class Cart(DispatchyMixin):
    ...     def add(self, sku: str) -> None:
    ...         self.fire("item:added", {"sku": sku})
    >>>
    >>> cart = Cart()
    >>> cart.on("item:added.ui", render).add("A-1")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Self

from dispatchy.config import DispatcherConfig
from dispatchy.dispatcher import Dispatcher
from dispatchy.lifecycle.hooks import LifecycleHook, LifecycleHooks
from dispatchy.listeners.entry import Listener


class DispatchyMixin:
    """
    Adds event registration and dispatch to a host class.

    Class Attributes:
        dispatcher_config: Configuration used for each instance's dispatcher
    """

    dispatcher_config: ClassVar[DispatcherConfig | None] = None

    @property
    def dispatcher(self) -> Dispatcher:
        """The instance's dispatcher, created on first access."""
        dispatcher: Dispatcher | None = getattr(self, "_dispatchy_dispatcher", None)
        if dispatcher is None:
            dispatcher = Dispatcher(config=self.dispatcher_config)
            self._dispatchy_dispatcher = dispatcher
        return dispatcher

    @property
    def dispatch_disabled(self) -> bool:
        """Whether ``fire`` is currently a no-op for this instance."""
        return self.dispatcher.disabled

    @dispatch_disabled.setter
    def dispatch_disabled(self, value: bool) -> None:
        self.dispatcher.disabled = value

    def on(
        self,
        event_type: str | Mapping[str, Listener],
        listener: Listener | None = None,
        fire_once: bool = False,
    ) -> Self:
        """Register a listener; see ``Dispatcher.on``."""
        self.dispatcher.on(event_type, listener, fire_once)
        return self

    def on_map(self, listeners: Mapping[str, Listener], fire_once: bool = False) -> Self:
        """Register several listeners at once; see ``Dispatcher.on_map``."""
        self.dispatcher.on_map(listeners, fire_once)
        return self

    def one(
        self,
        event_type: str | Mapping[str, Listener],
        listener: Listener | None = None,
    ) -> Self:
        """Register a fire-once listener; see ``Dispatcher.one``."""
        self.dispatcher.one(event_type, listener)
        return self

    def off(self, event_type: str = "", listener: Listener | None = None) -> Self:
        """Remove listeners; see ``Dispatcher.off``."""
        self.dispatcher.off(event_type, listener)
        return self

    def fire(self, event_type: str, payload: Any = None) -> Self:
        """Dispatch an event; see ``Dispatcher.fire``."""
        self.dispatcher.fire(event_type, payload)
        return self

    def register_event(
        self,
        event_type: str,
        lifecycle: LifecycleHooks | Mapping[str, LifecycleHook | None],
    ) -> None:
        """Attach lifecycle hooks to an event name; see ``Dispatcher.register_event``."""
        self.dispatcher.register_event(event_type, lifecycle)

    def register_persistent_event(self, event_type: str) -> None:
        """Make an event name replay its first dispatch to later listeners."""
        self.dispatcher.register_persistent_event(event_type)


__all__ = ["DispatchyMixin"]
