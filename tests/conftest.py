"""
Shared pytest fixtures for the dispatchy tests.

Fixtures:
- dispatcher: fresh Dispatcher with tracing disabled
- isolating_dispatcher: Dispatcher that logs listener errors instead of raising
- traced_dispatcher / mock_tracer: Dispatcher wired to a MockTracer
- assertions: DispatcherAssertions bound to the dispatcher fixture
- spy_factory: creates named ListenerSpy instances
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from dispatchy import Dispatcher, DispatcherConfig
from dispatchy.observability import MockTracer
from dispatchy.testing import DispatcherAssertions, ListenerSpy


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Create a fresh dispatcher for testing."""
    return Dispatcher(enable_tracing=False)


@pytest.fixture
def isolating_dispatcher() -> Dispatcher:
    """Create a dispatcher that isolates listener failures."""
    return Dispatcher(config=DispatcherConfig(enable_tracing=False, isolate_listener_errors=True))


@pytest.fixture
def mock_tracer() -> MockTracer:
    """Create a tracer that records spans."""
    return MockTracer()


@pytest.fixture
def traced_dispatcher(mock_tracer: MockTracer) -> Dispatcher:
    """Create a dispatcher that records spans on mock_tracer."""
    return Dispatcher(tracer=mock_tracer)


@pytest.fixture
def assertions(dispatcher: Dispatcher) -> DispatcherAssertions:
    """Assertions bound to the dispatcher fixture."""
    return DispatcherAssertions(dispatcher)


@pytest.fixture
def spy_factory() -> Callable[..., ListenerSpy]:
    """Factory for named listener spies."""

    def factory(name: str = "spy", side_effect=None) -> ListenerSpy:
        return ListenerSpy(side_effect, name=name)

    return factory
