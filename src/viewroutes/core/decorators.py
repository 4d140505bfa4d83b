"""Marker helper for event listener methods.

``subscribe(event, *, priority=0, hooks="events", name=None, **kwargs)``
stores a marker dict on the function under ``TARGET_ATTR_NAME``. The marker
starts with ``{"name": hooks, "event": event, "priority": priority}``; an
explicit ``name`` becomes ``entry_name``; extra ``kwargs`` (plugin options
such as ``logging_before=False``) are copied verbatim. Markers accumulate, so
one function can be bound by several hook tables. Nothing is registered at
decoration time; ``BaseHooks`` discovers the markers when it is created.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .base_hooks import TARGET_ATTR_NAME

__all__ = ["subscribe"]


def subscribe(
    event: str,
    *,
    priority: int = 0,
    hooks: str = "events",
    name: Optional[str] = None,
    **kwargs: Any,
) -> Callable:
    """Mark a method as a listener for ``event``.

    Args:
        event: Event name (e.g. ``RoutingEvents.ALTER``).
        priority: Higher priorities are dispatched first.
        hooks: Name of the hook table that binds the listener.
        name: Optional explicit listener name (defaults to the function name).
    """

    def decorator(func: Callable) -> Callable:
        markers = list(getattr(func, TARGET_ATTR_NAME, []))
        payload = {"name": hooks, "event": event, "priority": int(priority)}
        if name is not None:
            payload["entry_name"] = name
        payload.update(kwargs)
        markers.append(payload)
        setattr(func, TARGET_ATTR_NAME, markers)
        return func

    return decorator
