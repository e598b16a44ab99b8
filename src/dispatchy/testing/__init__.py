"""
Test utilities for dispatchy.

Components:
    ListenerSpy: Callable listener that records its invocations
    DispatcherAssertions: Assertions on listener counts and call order

Example:
    >>> from dispatchy.testing import ListenerSpy
    >>>
    >>> spy = ListenerSpy()
    >>> dispatcher.one("app:ready", spy)
    >>> dispatcher.fire("app:ready").fire("app:ready")
    >>> assert spy.call_count == 1

Note:
    This module is intended for test code only. It should not be imported
    in production code paths.
"""

from dispatchy.testing.assertions import DispatcherAssertions
from dispatchy.testing.spy import ListenerSpy, SpyCall

__all__ = [
    "DispatcherAssertions",
    "ListenerSpy",
    "SpyCall",
]
