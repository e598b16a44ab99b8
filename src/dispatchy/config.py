"""
Configuration for the dispatcher.

This module provides:
- DispatcherConfig: Behavioural switches for a Dispatcher instance
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatcherConfig:
    """
    Configuration for a Dispatcher.

    Attributes:
        enable_tracing: Emit OpenTelemetry spans around dispatch when
            OpenTelemetry is installed. Ignored if a tracer is passed
            explicitly to the dispatcher.
        isolate_listener_errors: If True, an exception raised by a listener
            is logged and counted, and the remaining listeners still run.
            If False (default), the exception propagates out of ``fire``.
        disabled: Initial value of the dispatch-disabled flag. While the
            flag is set, ``fire`` does nothing.

    Example:
        >>> config = DispatcherConfig(isolate_listener_errors=True)
        >>> dispatcher = Dispatcher(config=config)
    """

    enable_tracing: bool = True
    isolate_listener_errors: bool = False
    disabled: bool = False


__all__ = ["DispatcherConfig"]
