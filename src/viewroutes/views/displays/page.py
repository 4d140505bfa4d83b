"""Page display: the view rendered as a full page at its own path."""

from __future__ import annotations

from typing import Any, Dict

from viewroutes.views.displays._base_display import PathDisplay
from viewroutes.views.executable import ViewExecutable


class PageDisplay(PathDisplay):
    display_code = "page"
    display_description = "Display the view as a page, with a URL and menu links"

    def configure(
        self,
        path: str,
        title: str = "",
        arguments: Dict[str, Any] = {},  # noqa: B006 - validated copy, never mutated
        enabled: bool = True,
        **extra: Any,
    ) -> None:
        pass  # Storage is handled by the wrapper


ViewExecutable.register_display(PageDisplay)
