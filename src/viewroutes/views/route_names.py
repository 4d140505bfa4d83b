"""Index of the route names owned by view displays.

Keys are ``"{view_id}.{display_id}"``, values route names. The index is
written to state under ``views.view_route_names``; URL generation reads it
from there and never recomputes it outside a rebuild.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from viewroutes.state import StateStore

__all__ = ["RouteNameRegistry", "VIEW_ROUTE_NAMES_KEY"]

VIEW_ROUTE_NAMES_KEY = "views.view_route_names"


class RouteNameRegistry:
    __slots__ = ("state", "key", "_names")

    def __init__(self, state: StateStore, key: str = VIEW_ROUTE_NAMES_KEY) -> None:
        self.state = state
        self.key = key
        self._names: Dict[str, str] = {}

    def merge(self, names: Optional[Mapping[str, str]]) -> None:
        """Add collected names; later writers win."""
        self._names.update(names or {})

    def merge_claims(self, names: Optional[Mapping[str, str]]) -> None:
        """Add claimed names; keys already present keep their route."""
        for key, route_name in (names or {}).items():
            self._names.setdefault(key, route_name)

    def persist(self) -> None:
        self.state.set(self.key, dict(self._names))

    def load(self) -> Dict[str, str]:
        """Replace the in-memory index with the persisted one."""
        self._names = dict(self.state.get(self.key) or {})
        return dict(self._names)

    def route_name(self, view_id: str, display_id: str) -> Optional[str]:
        return self._names.get(f"{view_id}.{display_id}")

    def as_dict(self) -> Dict[str, str]:
        return dict(self._names)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._names

    def __len__(self) -> int:
        return len(self._names)
