"""Route rebuild orchestrator.

``RouteBuilder(dispatcher, providers=None)`` owns the collections of one
rebuild and threads them through the routing events:

1. ``route.dynamic`` with a fresh collection (provider ``dynamic_routes``);
2. ``route.alter`` once per static provider, in registration order, each
   with that provider's own collection;
3. ``route.alter`` for the dynamic collection;
4. the collections are merged (static providers first, then dynamic; later
   names replace earlier ones) and ``route.finished`` is dispatched.

Providers are either ``RouteCollection`` objects, copied for every rebuild,
or callables returning a fresh collection. Rebuilds are not reentrant.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

from viewroutes.core.dispatcher import EventDispatcher
from viewroutes.core.events import Event, RouteBuildEvent, RoutingEvents
from viewroutes.routing.route import RouteCollection

__all__ = ["DYNAMIC_PROVIDER", "RouteBuilder"]

logger = logging.getLogger("viewroutes")

DYNAMIC_PROVIDER = "dynamic_routes"

RouteSource = Union[RouteCollection, Callable[[], RouteCollection]]


class RouteBuilder:
    def __init__(
        self, dispatcher: EventDispatcher, providers: Optional[Dict[str, RouteSource]] = None
    ) -> None:
        self.dispatcher = dispatcher
        self._providers: Dict[str, RouteSource] = dict(providers or {})
        self._building = False
        self.routes = RouteCollection()

    def add_provider(self, name: str, source: RouteSource) -> "RouteBuilder":
        if name == DYNAMIC_PROVIDER:
            raise ValueError(f"Provider name '{DYNAMIC_PROVIDER}' is reserved")
        if name in self._providers:
            raise ValueError(f"Route provider '{name}' already registered")
        self._providers[name] = source
        return self

    def providers(self) -> Tuple[str, ...]:
        return tuple(self._providers)

    def rebuild(self) -> RouteCollection:
        if self._building:
            raise RuntimeError("Route rebuild already in progress")
        self._building = True
        try:
            dynamic = RouteCollection()
            self.dispatcher.dispatch(RoutingEvents.DYNAMIC, RouteBuildEvent(dynamic, DYNAMIC_PROVIDER))

            collections: List[RouteCollection] = []
            for name, source in self._providers.items():
                collection = self._materialize(source)
                self.dispatcher.dispatch(RoutingEvents.ALTER, RouteBuildEvent(collection, name))
                collections.append(collection)
            self.dispatcher.dispatch(RoutingEvents.ALTER, RouteBuildEvent(dynamic, DYNAMIC_PROVIDER))
            collections.append(dynamic)

            final = RouteCollection()
            for collection in collections:
                final.add_collection(collection)
            self.routes = final
            self.dispatcher.dispatch(RoutingEvents.FINISHED, Event())
        finally:
            self._building = False
        logger.info("route rebuild finished: %d route(s)", len(final))
        return final

    @staticmethod
    def _materialize(source: RouteSource) -> RouteCollection:
        if isinstance(source, RouteCollection):
            return copy.deepcopy(source)
        collection = source()
        if not isinstance(collection, RouteCollection):
            raise TypeError("Route providers must return a RouteCollection")
        return collection
