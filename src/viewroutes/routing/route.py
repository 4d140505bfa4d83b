"""Route definitions and the ordered, mutable route table."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

__all__ = ["Route", "RouteCollection", "load_routes", "path_variables"]

_VARIABLE = re.compile(r"\{(\w+)\}")


def path_variables(path: str) -> List[str]:
    """Return the ``{name}`` placeholders of ``path`` in order."""
    return _VARIABLE.findall(path)


@dataclass
class Route:
    """A route definition: URL pattern plus defaults, requirements and options.

    ``path`` always starts with a slash.
    """

    path: str
    defaults: Dict[str, Any] = field(default_factory=dict)
    requirements: Dict[str, Any] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.path = "/" + self.path.strip().lstrip("/")

    @property
    def variables(self) -> List[str]:
        return path_variables(self.path)

    def get_default(self, name: str, default: Any = None) -> Any:
        return self.defaults.get(name, default)

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)


class RouteCollection:
    """Ordered table of named routes.

    The collection is owned by whoever builds it; callees insert into it and
    read from it for the duration of a call. Adding a name that already exists
    replaces the route and moves the name to the end of the table.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Optional[Dict[str, Route]] = None) -> None:
        self._routes: Dict[str, Route] = {}
        for name, route in (routes or {}).items():
            self.add(name, route)

    def add(self, name: str, route: Route) -> None:
        if not isinstance(route, Route):
            raise TypeError(f"RouteCollection.add() expects a Route, got {type(route).__name__}")
        self._routes.pop(name, None)
        self._routes[name] = route

    def add_collection(self, other: "RouteCollection") -> None:
        for name, route in other.items():
            self.add(name, route)

    def get(self, name: str) -> Optional[Route]:
        return self._routes.get(name)

    def remove(self, *names: str) -> None:
        for name in names:
            self._routes.pop(name, None)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._routes)

    def all(self) -> Dict[str, Route]:
        return dict(self._routes)

    def items(self) -> Iterator[Tuple[str, Route]]:
        return iter(list(self._routes.items()))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._routes))

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __repr__(self) -> str:
        return f"RouteCollection({list(self._routes)!r})"


def load_routes(definitions: Mapping[str, Mapping[str, Any]]) -> RouteCollection:
    """Build a collection from ``{name: {"path": ..., "defaults": ...}}`` data.

    Only ``path``, ``defaults``, ``requirements`` and ``options`` are
    accepted; anything else raises ``TypeError``.
    """
    collection = RouteCollection()
    for name, definition in definitions.items():
        collection.add(name, Route(**definition))
    return collection
