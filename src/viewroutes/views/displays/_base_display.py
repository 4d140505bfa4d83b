"""Display plugin contract.

``DisplayPlugin``
    Base class of every display handler. Class attributes:

    - ``display_code`` – registration key, matched against
      ``DisplayConfig.display_plugin``
    - ``display_description`` – human readable description
    - ``uses_route`` – capability flag read by ``get_applicable_views``

    ``DisplayPlugin(view, display)`` binds the handler to a ``ViewExecutable``
    and its ``DisplayConfig``, then calls ``configure(**display_options)``.
    A subclass declares accepted options through the signature of its own
    ``configure``; ``__init_subclass__`` wraps it with pydantic
    ``validate_call`` and stores the options, so bad option types raise
    ``pydantic.ValidationError`` at construction time.

    ``router()`` is the capability query: plain displays return ``None``.

``PathDisplay``
    Router display bound to a URL path (``path`` option). ``router()``
    returns the display itself. ``collect_routes`` adds
    ``view.{view_id}.{display_id}`` to a collection; ``alter_routes`` takes
    over a route contributed by another source when its path outline equals
    the display path. Both return ``{"{view_id}.{display_id}": route_name}``.

Path translation: each ``%`` segment of the display path becomes
``{arg_N}`` with N counted over the ``%`` segments; argument handlers
declared in ``arguments`` beyond those get optional ``{arg_N}`` segments
appended with an empty default.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from pydantic import validate_call

from viewroutes.routing.route import Route, RouteCollection

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from viewroutes.views.entity import DisplayConfig
    from viewroutes.views.executable import ViewExecutable

__all__ = ["DisplayPlugin", "PathDisplay", "PAGE_CONTROLLER"]

PAGE_CONTROLLER = "viewroutes.page_controller"

_VARIABLE_SEGMENT = re.compile(r"^\{\w+\}$")


def _wrap_configure(original_configure: Callable) -> Callable:
    validated = validate_call(original_configure)

    def wrapper(self: "DisplayPlugin", **options: Any) -> None:
        validated(self, **options)
        self._options.update(options)

    return wrapper


class DisplayPlugin:
    """Base display handler; no routing capability."""

    display_code: str = ""
    display_description: str = ""
    uses_route: bool = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "configure" in cls.__dict__:
            cls.configure = _wrap_configure(cls.__dict__["configure"])

    def __init__(self, view: "ViewExecutable", display: "DisplayConfig") -> None:
        self.view: Optional["ViewExecutable"] = view
        self.display = display
        self._options: Dict[str, Any] = {}
        self.configure(**display.display_options)

    def configure(self, **options: Any) -> None:
        self._options.update(options)

    @property
    def display_id(self) -> str:
        return self.display.id

    @property
    def view_id(self) -> str:
        return self.view.id if self.view is not None else ""

    @property
    def pair_key(self) -> str:
        return f"{self.view_id}.{self.display_id}"

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def router(self) -> Optional["PathDisplay"]:
        return None

    def destroy(self) -> None:
        self.view = None


class PathDisplay(DisplayPlugin):
    """Display that owns a URL path and contributes a route for it."""

    uses_route = True

    def router(self) -> "PathDisplay":
        return self

    def get_path(self) -> str:
        return str(self.get_option("path", "")).strip("/")

    def get_route_name(self) -> str:
        return f"view.{self.view_id}.{self.display_id}"

    def get_route_path(self) -> Tuple[str, Dict[str, Any]]:
        """Translate the display path to a route path plus extra defaults."""
        bits: List[str] = self.get_path().split("/") if self.get_path() else []
        defaults: Dict[str, Any] = {}
        arg_counter = 0
        for pos, bit in enumerate(bits):
            if bit == "%":
                bits[pos] = f"{{arg_{arg_counter}}}"
                arg_counter += 1
        total_arguments = len(self.get_option("arguments") or {})
        while arg_counter < total_arguments:
            arg_id = f"arg_{arg_counter}"
            defaults[arg_id] = ""
            bits.append(f"{{{arg_id}}}")
            arg_counter += 1
        return "/" + "/".join(bits), defaults

    def view_defaults(self) -> Dict[str, Any]:
        return {
            "_controller": PAGE_CONTROLLER,
            "view_id": self.view_id,
            "display_id": self.display_id,
        }

    def build_route(self) -> Route:
        path, defaults = self.get_route_path()
        return Route(path, defaults={**self.view_defaults(), **defaults})

    def collect_routes(self, collection: RouteCollection) -> Dict[str, str]:
        route_name = self.get_route_name()
        collection.add(route_name, self.build_route())
        return {self.pair_key: route_name}

    def alter_routes(self, collection: RouteCollection) -> Dict[str, str]:
        view_route_names: Dict[str, str] = {}
        view_outline = self.get_path()
        for name, route in collection.items():
            if "view_id" in route.defaults:
                continue
            if self._outline(route.path) != view_outline:
                continue
            argument_map = {f"arg_{key}": variable for key, variable in enumerate(route.variables)}
            collection.add(
                name,
                Route(
                    route.path,
                    defaults={**route.defaults, **self.view_defaults()},
                    requirements=dict(route.requirements),
                    options={**route.options, "_view_argument_map": argument_map},
                ),
            )
            view_route_names[self.pair_key] = name
        return view_route_names

    @staticmethod
    def _outline(path: str) -> str:
        """Path with every ``{variable}`` segment replaced by ``%``."""
        return "/".join(
            "%" if _VARIABLE_SEGMENT.match(bit) else bit for bit in path.strip("/").split("/")
        )
