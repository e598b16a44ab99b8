"""Library exceptions for the dispatchy package."""

from typing import Any


class DispatchyError(Exception):
    """Base exception for dispatchy library."""

    pass


class InvalidListenerError(DispatchyError, TypeError):
    """
    Raised when a listener passed to ``on``/``one``/``on_map`` is not callable.

    This is the only validation failure of the registry. It subclasses
    TypeError so callers catching the builtin keep working.

    Attributes:
        event_type: The event string the listener was registered for
        listener: The rejected value
    """

    def __init__(self, event_type: str, listener: Any) -> None:
        self.event_type = event_type
        self.listener = listener
        super().__init__(
            f"Listener for '{event_type}' must be callable, got {type(listener).__name__}"
        )


class InvalidLifecycleError(DispatchyError, TypeError):
    """
    Raised when a lifecycle hook set contains an unknown key or a non-callable hook.

    Attributes:
        event_type: The event name the hooks were registered for
        hook_name: Name of the offending hook
    """

    def __init__(self, event_type: str, hook_name: str, message: str) -> None:
        self.event_type = event_type
        self.hook_name = hook_name
        super().__init__(f"Invalid lifecycle hook '{hook_name}' for '{event_type}': {message}")


__all__ = [
    "DispatchyError",
    "InvalidListenerError",
    "InvalidLifecycleError",
]
