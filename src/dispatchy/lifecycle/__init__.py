"""Custom event lifecycle hooks and persistent events."""

from dispatchy.lifecycle.hooks import HOOK_NAMES, LifecycleHook, LifecycleHooks
from dispatchy.lifecycle.persistent import PersistentEvent

__all__ = [
    "HOOK_NAMES",
    "LifecycleHook",
    "LifecycleHooks",
    "PersistentEvent",
]
