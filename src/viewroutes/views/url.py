"""URL generation for view displays.

Reads the route name index persisted by the last rebuild; it never asks the
views themselves, so a display only gets a URL after a rebuild included it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from viewroutes.routing.route import RouteCollection
from viewroutes.state import StateStore
from viewroutes.views.route_names import VIEW_ROUTE_NAMES_KEY

__all__ = ["ViewUrlGenerator"]


class ViewUrlGenerator:
    __slots__ = ("state", "routes", "key")

    def __init__(
        self, state: StateStore, routes: RouteCollection, key: str = VIEW_ROUTE_NAMES_KEY
    ) -> None:
        self.state = state
        self.routes = routes
        self.key = key

    def route_name(self, view_id: str, display_id: str) -> str:
        names: Dict[str, str] = self.state.get(self.key) or {}
        name: Optional[str] = names.get(f"{view_id}.{display_id}")
        if name is None:
            raise LookupError(f"No route registered for view {view_id!r}, display {display_id!r}")
        return name

    def url(self, view_id: str, display_id: str, *args: Any, **params: Any) -> str:
        """Build the path of a view display.

        Positional ``args`` fill the route variables in order, ``params``
        fill them by name. Missing variables use the route default; trailing
        empty segments are dropped.

        Raises:
            LookupError: when the display has no route.
            ValueError: when a required variable has no value.
        """
        name = self.route_name(view_id, display_id)
        route = self.routes.get(name)
        if route is None:
            raise LookupError(f"Route {name!r} is not in the route table")
        values = dict(zip(route.variables, args))
        values.update(params)
        path = route.path
        for variable in route.variables:
            if variable in values:
                value = values[variable]
            elif variable in route.defaults:
                value = route.defaults[variable]
            else:
                raise ValueError(f"Missing value for {variable!r} in route {name!r}")
            path = path.replace(f"{{{variable}}}", quote(str(value), safe=""))
        bits = path.strip("/").split("/")
        while bits and not bits[-1]:
            bits.pop()
        return "/" + "/".join(bits)
