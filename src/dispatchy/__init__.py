"""
dispatchy - Namespace-aware publish/subscribe for Python objects.

This library provides:
- Dispatcher with on/one/off/fire and namespaced event names
- Lifecycle hooks (setup/add/remove/teardown) for custom events
- Persistent events that replay their first payload to late listeners
- A mixin that gives any class a chainable event API
- Optional OpenTelemetry tracing
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dispatchy-py")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from dispatchy.config import DispatcherConfig
from dispatchy.dispatcher import Dispatcher, create
from dispatchy.events import EventMeta, ParsedType, parse_types
from dispatchy.exceptions import (
    DispatchyError,
    InvalidLifecycleError,
    InvalidListenerError,
)
from dispatchy.lifecycle import LifecycleHooks, PersistentEvent
from dispatchy.listeners import Listener, ListenerEntry
from dispatchy.mixin import DispatchyMixin

__all__ = [
    "__version__",
    # Dispatcher
    "Dispatcher",
    "DispatcherConfig",
    "create",
    # Events
    "EventMeta",
    "ParsedType",
    "parse_types",
    # Listeners
    "Listener",
    "ListenerEntry",
    # Lifecycle
    "LifecycleHooks",
    "PersistentEvent",
    # Mixin
    "DispatchyMixin",
    # Exceptions
    "DispatchyError",
    "InvalidListenerError",
    "InvalidLifecycleError",
]
