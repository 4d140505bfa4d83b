"""Feed display: a path display whose route only answers the feed format."""

from __future__ import annotations

from typing import Any, Dict

from viewroutes.routing.route import Route
from viewroutes.views.displays._base_display import PathDisplay
from viewroutes.views.executable import ViewExecutable


class FeedDisplay(PathDisplay):
    display_code = "feed"
    display_description = "Display the view as a feed, such as an RSS feed"

    def configure(
        self,
        path: str,
        title: str = "",
        arguments: Dict[str, Any] = {},  # noqa: B006 - validated copy, never mutated
        format: str = "xml",  # noqa: A002 - option name
        enabled: bool = True,
        **extra: Any,
    ) -> None:
        pass  # Storage is handled by the wrapper

    def build_route(self) -> Route:
        route = super().build_route()
        route.requirements["_format"] = self.get_option("format", "xml")
        return route


ViewExecutable.register_display(FeedDisplay)
