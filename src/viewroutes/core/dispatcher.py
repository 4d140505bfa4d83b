"""Synchronous event dispatcher with prioritized listeners.

Listeners run in descending priority; listeners sharing a priority run in the
order they were added. Subscribers are read through their hook tables and the
handler is resolved at dispatch time, so plugins attached after subscription
still wrap the call. Dispatch stops early once an event reports
``propagation_stopped``.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .events import Event
from .subscriber import is_event_subscriber

__all__ = ["EventDispatcher"]

logger = logging.getLogger("viewroutes")

# (priority, sequence, resolver, owner)
_Listener = Tuple[int, int, Callable[[], Callable], Any]


class EventDispatcher:
    def __init__(self) -> None:
        self._listeners: Dict[str, List[_Listener]] = {}
        self._sequence = itertools.count()

    def add_listener(self, event_name: str, listener: Callable, priority: int = 0) -> None:
        self._add(event_name, priority, lambda: listener, listener)

    def add_subscriber(self, subscriber: Any) -> None:
        if not is_event_subscriber(subscriber):
            raise TypeError("add_subscriber() requires an EventSubscriber instance")
        for _, hooks in subscriber._iter_registered_hooks():
            for event_name, priority, name in hooks.listeners():
                self._add(event_name, priority, self._resolver(hooks, name), subscriber)

    def remove_subscriber(self, subscriber: Any) -> None:
        for event_name, listeners in list(self._listeners.items()):
            kept = [item for item in listeners if item[3] is not subscriber]
            if kept:
                self._listeners[event_name] = kept
            else:
                del self._listeners[event_name]

    def get_listeners(self, event_name: str) -> List[Callable]:
        ordered = sorted(self._listeners.get(event_name, ()), key=lambda item: (-item[0], item[1]))
        return [resolve() for _, _, resolve, _ in ordered]

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def dispatch(self, event_name: str, event: Optional[Event] = None) -> Event:
        if event is None:
            event = Event()
        listeners = self.get_listeners(event_name)
        logger.debug("dispatching %s to %d listener(s)", event_name, len(listeners))
        for listener in listeners:
            listener(event)
            if event.propagation_stopped:
                break
        return event

    def _add(self, event_name: str, priority: int, resolver: Callable, owner: Any) -> None:
        self._listeners.setdefault(event_name, []).append(
            (int(priority), next(self._sequence), resolver, owner)
        )

    @staticmethod
    def _resolver(hooks: Any, name: str) -> Callable[[], Callable]:
        return lambda: hooks.get(name)
