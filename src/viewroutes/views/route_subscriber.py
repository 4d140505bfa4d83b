"""Builds the routes of all views.

A rebuild runs in three steps, each driven by a routing event:

1. ``route.dynamic``: every candidate display that can route adds its own
   route (``view.{view_id}.{display_id}``) to the shared collection. The
   collected names are persisted right away. Loading the candidate set
   empties the name index, so each cycle persists only what it found.
2. ``route.alter``, once per route source: candidate displays may take over
   routes other sources contributed for the same path. Claimed pairs leave
   the candidate set, so later alter passes skip them; a claim never
   replaces a name the pair already has.
3. ``route.finished``: the candidate cache is dropped and the final index is
   persisted under ``views.view_route_names``.

The subscriber also copies the status code requested during view rendering
(request attribute ``_http_statuscode``) onto page results of view routes.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from smartseeds import SmartOptions
from smartseeds.typeutils import safe_is_instance

from viewroutes.core.decorators import subscribe
from viewroutes.core.events import ControllerResultEvent, Event, KernelEvents, RoutingEvents
from viewroutes.routing.route import RouteCollection
from viewroutes.routing.subscriber_base import RouteSubscriberBase
from viewroutes.state import StateStore
from viewroutes.views.applicable import get_applicable_views
from viewroutes.views.candidates import ViewCandidateIndex, ViewDisplayPair
from viewroutes.views.displays._base_display import PathDisplay
from viewroutes.views.entity import ViewStorage
from viewroutes.views.executable import ExecutableFactory
from viewroutes.views.route_names import VIEW_ROUTE_NAMES_KEY, RouteNameRegistry

__all__ = ["RouteSubscriber"]

logger = logging.getLogger("viewroutes")

_DEFAULTS: Dict[str, Any] = {
    "state_key": VIEW_ROUTE_NAMES_KEY,
    "applicable_type": "uses_route",
}


class RouteSubscriber(RouteSubscriberBase):
    """Route subscriber for view displays.

    Args:
        storage: View configuration storage.
        state: Key-value store receiving the route name index.
        options: ``state_key``, ``applicable_type`` and ``factory``
            (an ``ExecutableFactory``) override the defaults.
    """

    def __init__(self, storage: ViewStorage, state: StateStore, **options: Any) -> None:
        super().__init__()
        opts = SmartOptions(options, defaults=_DEFAULTS)
        self.storage = storage
        self.factory = getattr(opts, "factory", None) or ExecutableFactory()
        self.applicable_type = getattr(opts, "applicable_type", "uses_route")
        self.route_names = RouteNameRegistry(state, getattr(opts, "state_key", VIEW_ROUTE_NAMES_KEY))
        self.candidates = ViewCandidateIndex(self._applicable_views)

    def _applicable_views(self):
        # A freshly loaded candidate set starts a new rebuild cycle.
        self.route_names.clear()
        return get_applicable_views(self.storage, self.applicable_type, self.factory)

    def reset(self) -> None:
        """Drop the cached candidate set."""
        self.candidates.reset()

    def get_views_display_ids_with_route(self) -> Dict[str, ViewDisplayPair]:
        return self.candidates.get_candidates()

    # ------------------------------------------------------------------
    # Event listeners
    # ------------------------------------------------------------------
    @subscribe(KernelEvents.VIEW, priority=75)
    def on_html_page(self, event: ControllerResultEvent) -> None:
        """Apply the status code set by the view's HTTP status area."""
        page = event.controller_result
        if not safe_is_instance(page, "viewroutes.http.HtmlPage"):
            return
        request = event.request
        if request is not None and request.attributes.has("view_id"):
            page.set_status_code(request.attributes.get("_http_statuscode", 200))

    @subscribe(RoutingEvents.FINISHED)
    def route_rebuild_finished(self, event: Optional[Event] = None) -> None:
        self.reset()
        self.route_names.persist()

    # ------------------------------------------------------------------
    # Route building
    # ------------------------------------------------------------------
    def routes(self, collection: Optional[RouteCollection] = None) -> RouteCollection:
        if collection is None:
            collection = RouteCollection()
        for pair in self._snapshot():
            with self._activated(pair) as display:
                if display is not None:
                    self.route_names.merge(display.collect_routes(collection))
        self.route_names.persist()
        return collection

    def alter_routes(self, collection: RouteCollection, provider: Optional[str]) -> None:
        for pair in self._snapshot():
            with self._activated(pair) as display:
                claimed = display.alter_routes(collection) if display is not None else None
            if not claimed:
                continue
            logger.debug(
                "%s: routes claimed by views: %s",
                provider,
                ", ".join(f"{name} by {key}" for key, name in sorted(claimed.items())),
            )
            self.route_names.merge_claims(claimed)
            for key in claimed:
                self.candidates.discard(key)

    def _snapshot(self) -> List[ViewDisplayPair]:
        return list(self.candidates.get_candidates().values())

    @contextmanager
    def _activated(self, pair: ViewDisplayPair) -> Iterator[Optional[PathDisplay]]:
        """Yield the router capability of ``pair``'s display, or None.

        The executable built for the pair is destroyed on every exit path.
        """
        view = self.storage.load(pair.view_id)
        if view is None:
            logger.debug("skipping %s: view not found", pair)
            yield None
            return
        try:
            executable = self.factory.get(view)
        except LookupError as exc:
            logger.debug("skipping %s: %s", pair, exc)
            yield None
            return
        try:
            display = None
            if executable.set_display(pair.display_id):
                display = executable.get_display_handler(pair.display_id)
            yield display.router() if display is not None else None
        finally:
            executable.destroy()
