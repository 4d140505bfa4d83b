"""Base class for subscribers that add routes to or alter routes of a rebuild."""

from __future__ import annotations

from typing import Optional

from viewroutes.core.decorators import subscribe
from viewroutes.core.events import RouteBuildEvent, RoutingEvents
from viewroutes.core.hooks import Hooks
from viewroutes.core.subscriber import EventSubscriber
from viewroutes.routing.route import RouteCollection

__all__ = ["RouteSubscriberBase"]


class RouteSubscriberBase(EventSubscriber):
    """Forwards ``route.dynamic`` to ``routes()`` and ``route.alter`` to
    ``alter_routes()``. Subclasses override either or both; listeners marked
    on subclasses join the same ``events`` hook table.
    """

    def __init__(self) -> None:
        self.events = Hooks(self, name="events")

    @subscribe(RoutingEvents.DYNAMIC)
    def on_dynamic_routes(self, event: RouteBuildEvent) -> None:
        self.routes(event.collection)

    @subscribe(RoutingEvents.ALTER)
    def on_alter_routes(self, event: RouteBuildEvent) -> None:
        self.alter_routes(event.collection, event.provider)

    def routes(self, collection: Optional[RouteCollection] = None) -> RouteCollection:
        """Add routes to ``collection`` and return it."""
        return RouteCollection() if collection is None else collection

    def alter_routes(self, collection: RouteCollection, provider: Optional[str]) -> None:
        """Alter routes contributed by ``provider``."""
