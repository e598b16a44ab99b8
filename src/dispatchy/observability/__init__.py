"""
Observability utilities for dispatchy.

Tracing is optional: when OpenTelemetry is not installed every component
falls back to a no-op tracer.

Example:
    >>> from dispatchy.observability import MockTracer
    >>> from dispatchy import Dispatcher
    >>>
    >>> tracer = MockTracer()
    >>> dispatcher = Dispatcher(tracer=tracer)
    >>> dispatcher.on("app:ready", lambda e, payload: None).fire("app:ready")
    >>> tracer.span_names
    ['dispatchy.dispatch', 'dispatchy.listener']
"""

from dispatchy.observability.attributes import (
    ATTR_EVENT_NAMESPACE,
    ATTR_EVENT_TYPE,
    ATTR_LISTENER_COUNT,
    ATTR_LISTENER_FIRE_ONCE,
    ATTR_LISTENER_NAME,
    ATTR_LISTENER_SUCCESS,
)
from dispatchy.observability.tracer import (
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    Tracer,
    create_tracer,
)
from dispatchy.observability.tracing import (
    OTEL_AVAILABLE,
    get_tracer,
    should_trace,
)

__all__ = [
    # Tracing utilities
    "OTEL_AVAILABLE",
    "get_tracer",
    "should_trace",
    # Tracer (composition-based API)
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "create_tracer",
    # Attributes
    "ATTR_EVENT_TYPE",
    "ATTR_EVENT_NAMESPACE",
    "ATTR_LISTENER_NAME",
    "ATTR_LISTENER_COUNT",
    "ATTR_LISTENER_SUCCESS",
    "ATTR_LISTENER_FIRE_ONCE",
]
