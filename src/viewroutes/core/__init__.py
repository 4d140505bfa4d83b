"""Hook runtime aggregator.

Exposes ``BaseHooks`` (plugin-free listener table), ``Hooks`` (plugin
enabled), the ``subscribe`` marker, the ``EventSubscriber`` mixin and the
``EventDispatcher``. Importing performs only imports.
"""

from .base_hooks import BaseHooks
from .decorators import subscribe
from .dispatcher import EventDispatcher
from .events import ControllerResultEvent, Event, KernelEvents, RouteBuildEvent, RoutingEvents
from .hooks import Hooks
from .subscriber import EventSubscriber, is_event_subscriber

__all__ = [
    "BaseHooks",
    "ControllerResultEvent",
    "Event",
    "EventDispatcher",
    "EventSubscriber",
    "Hooks",
    "KernelEvents",
    "RouteBuildEvent",
    "RoutingEvents",
    "is_event_subscriber",
    "subscribe",
]
