"""View configuration entities and their storage.

A view is stored as plain configuration: an id, a status and a table of
displays keyed by display id. Every view carries a ``default`` display; it is
added when the stored data lacks one. Display options are free-form and are
validated later by the display plugin that consumes them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

__all__ = ["DisplayConfig", "ViewConfig", "ViewStorage"]


class DisplayConfig(BaseModel):
    id: str = ""
    display_plugin: str
    display_title: str = ""
    position: int = 0
    display_options: Dict[str, Any] = Field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return bool(self.display_options.get("enabled", True))


class ViewConfig(BaseModel):
    id: str
    label: str = ""
    status: bool = True
    base_table: str = "node"
    display: Dict[str, DisplayConfig] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _normalize_displays(self) -> "ViewConfig":
        for display_id, display in self.display.items():
            display.id = display_id
        if "default" not in self.display:
            self.display["default"] = DisplayConfig(
                id="default", display_plugin="default", display_title="Master", position=-1
            )
        return self

    def display_ids(self) -> List[str]:
        """Display ids ordered by position, then id."""
        return [
            display.id
            for display in sorted(self.display.values(), key=lambda d: (d.position, d.id))
        ]

    def get_display(self, display_id: str) -> Optional[DisplayConfig]:
        return self.display.get(display_id)


class ViewStorage:
    """In-memory storage of view configuration entities."""

    __slots__ = ("_views",)

    def __init__(self, views: Iterable[Union[ViewConfig, Dict[str, Any]]] = ()) -> None:
        self._views: Dict[str, ViewConfig] = {}
        for view in views:
            self.save(view)

    def save(self, view: Union[ViewConfig, Dict[str, Any]]) -> ViewConfig:
        if not isinstance(view, ViewConfig):
            view = ViewConfig.model_validate(view)
        self._views[view.id] = view
        return view

    def load(self, view_id: str) -> Optional[ViewConfig]:
        return self._views.get(view_id)

    def load_multiple(self, view_ids: Optional[Iterable[str]] = None) -> Dict[str, ViewConfig]:
        if view_ids is None:
            return dict(self._views)
        return {view_id: self._views[view_id] for view_id in view_ids if view_id in self._views}

    def delete(self, view_id: str) -> None:
        self._views.pop(view_id, None)

    def ids(self) -> List[str]:
        return sorted(self._views)
