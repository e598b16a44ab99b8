"""
Standard span attributes for dispatchy.

These constants keep span attribute names consistent between the
dispatcher and anything inspecting its traces.

Example:
    >>> from dispatchy.observability.attributes import ATTR_EVENT_TYPE
    >>>
    >>> with tracer.span("dispatchy.dispatch", {ATTR_EVENT_TYPE: "app:ready"}):
    ...     pass
"""

# =============================================================================
# Event Attributes
# =============================================================================

ATTR_EVENT_TYPE = "dispatchy.event.type"
"""Resolved event name being dispatched (e.g., 'app:ready')."""

ATTR_EVENT_NAMESPACE = "dispatchy.event.namespace"
"""Namespace the event was fired with, dot-joined ('' when none)."""

# =============================================================================
# Listener Attributes
# =============================================================================

ATTR_LISTENER_NAME = "dispatchy.listener.name"
"""Descriptive name of the listener being invoked."""

ATTR_LISTENER_COUNT = "dispatchy.listener.count"
"""Number of listeners matched for a dispatch."""

ATTR_LISTENER_SUCCESS = "dispatchy.listener.success"
"""Whether the listener completed without raising."""

ATTR_LISTENER_FIRE_ONCE = "dispatchy.listener.fire_once"
"""Whether the listener is dropped after this invocation."""

__all__ = [
    "ATTR_EVENT_TYPE",
    "ATTR_EVENT_NAMESPACE",
    "ATTR_LISTENER_NAME",
    "ATTR_LISTENER_COUNT",
    "ATTR_LISTENER_SUCCESS",
    "ATTR_LISTENER_FIRE_ONCE",
]
