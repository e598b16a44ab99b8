"""
Event metadata handed to listeners.

Every listener is invoked as ``listener(meta, payload)``; ``meta`` tells it
which event name and namespace the dispatch resolved to. This matters for
listeners registered on several types, and for namespace broadcasts
(``fire(".ns")``) where the caller never names the type.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dispatchy.events.parser import NAMESPACE_SEPARATOR


class EventMeta(BaseModel):
    """
    Immutable description of a single dispatch.

    Attributes:
        type: The event name the listener was registered under
        namespaces: Namespace tokens the event was fired with (empty when
            the fire call named no namespace)

    Example:
        >>> def listener(meta: EventMeta, payload: dict) -> None:
        ...     print(meta.type, meta.namespace)
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(
        ...,
        description="Resolved event name",
    )
    namespaces: tuple[str, ...] = Field(
        default=(),
        description="Namespace tokens given to fire()",
    )

    @property
    def namespace(self) -> str:
        """Fired namespace tokens joined with dots ('' when none)."""
        return NAMESPACE_SEPARATOR.join(self.namespaces)

    def __str__(self) -> str:
        if self.namespaces:
            return f"{self.type}{NAMESPACE_SEPARATOR}{self.namespace}"
        return self.type


__all__ = ["EventMeta"]
