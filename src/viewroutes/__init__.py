"""viewroutes public API surface.

- Exports the hook runtime (``Hooks``, ``subscribe``, ``EventDispatcher``),
  the route table (``Route``, ``RouteCollection``, ``RouteBuilder``), the
  view side (``ViewStorage``, ``RouteSubscriber``, ``ViewUrlGenerator``) and
  the state stores.
- Built-in plugins register themselves on import: the ``logging`` hook
  plugin and the ``default``, ``page``, ``block`` and ``feed`` displays.
  Imports go through ``import_module`` to avoid cycles.
"""

from importlib import import_module

__version__ = "0.3.0"

from .core import (
    ControllerResultEvent,
    EventDispatcher,
    EventSubscriber,
    Hooks,
    KernelEvents,
    RouteBuildEvent,
    RoutingEvents,
    subscribe,
)
from .http import HtmlPage, Request
from .routing import Route, RouteBuilder, RouteCollection, RouteSubscriberBase
from .state import MemoryState, SqliteState
from .views import RouteSubscriber, ViewConfig, ViewStorage, ViewUrlGenerator

for _plugin in (
    "plugins.logging",
    "views.displays.default",
    "views.displays.page",
    "views.displays.block",
    "views.displays.feed",
):
    import_module(f"{__name__}.{_plugin}")
del _plugin

__all__ = [
    "ControllerResultEvent",
    "EventDispatcher",
    "EventSubscriber",
    "Hooks",
    "HtmlPage",
    "KernelEvents",
    "MemoryState",
    "Request",
    "Route",
    "RouteBuildEvent",
    "RouteBuilder",
    "RouteCollection",
    "RouteSubscriber",
    "RouteSubscriberBase",
    "RoutingEvents",
    "SqliteState",
    "ViewConfig",
    "ViewStorage",
    "ViewUrlGenerator",
    "subscribe",
]
