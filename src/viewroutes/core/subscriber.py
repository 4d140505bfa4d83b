"""EventSubscriber mixin.

- ``_register_hooks(hooks)`` is called by every ``BaseHooks`` created with
  the instance as owner; tables with a name are stored in a per-instance
  registry.
- ``get_hooks(name)`` looks in the registry first, then falls back to an
  attribute of the same name (cached when it is a hook table). Raises
  ``AttributeError`` when nothing is found.
- ``subscribed_events()`` maps each event to ``[(listener, priority), ...]``
  across all registered tables, in registration order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

from smartseeds.typeutils import safe_is_instance

from .base_hooks import HOOKS_REGISTRY_ATTR_NAME

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .hooks import Hooks

__all__ = ["EventSubscriber", "is_event_subscriber"]


class EventSubscriber:
    """Mixin for objects exposing listeners through hook tables."""

    __slots__ = (HOOKS_REGISTRY_ATTR_NAME,)

    def _register_hooks(self, hooks: "Hooks") -> None:
        registry = getattr(self, HOOKS_REGISTRY_ATTR_NAME, None)
        if registry is None:
            registry = {}
            setattr(self, HOOKS_REGISTRY_ATTR_NAME, registry)
        if hooks.name:
            registry[hooks.name] = hooks

    def _iter_registered_hooks(self) -> Iterator[Tuple[str, "Hooks"]]:
        registry = getattr(self, HOOKS_REGISTRY_ATTR_NAME, None) or {}
        yield from registry.items()

    def get_hooks(self, name: str) -> "Hooks":
        registry = getattr(self, HOOKS_REGISTRY_ATTR_NAME, None)
        hooks: Optional[Any] = (registry or {}).get(name)
        if hooks is not None:
            return hooks
        candidate = getattr(self, name, None)
        if safe_is_instance(candidate, "viewroutes.core.base_hooks.BaseHooks"):
            self._register_hooks(candidate)
            return candidate
        raise AttributeError(f"No hooks named '{name}' on {type(self).__name__}")

    def subscribed_events(self) -> Dict[str, List[Tuple[str, int]]]:
        events: Dict[str, List[Tuple[str, int]]] = {}
        for _, hooks in self._iter_registered_hooks():
            for event, priority, listener in hooks.listeners():
                events.setdefault(event, []).append((listener, priority))
        return events


def is_event_subscriber(obj: Any) -> bool:
    """Return True when ``obj`` is an EventSubscriber instance."""
    return safe_is_instance(obj, "viewroutes.core.subscriber.EventSubscriber")
