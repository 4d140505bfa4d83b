"""Runtime view objects.

``ViewExecutable`` wraps a stored ``ViewConfig`` for one use: it holds the
lazily built display handlers and the active display. It may hold heavy
per-request state, so callers release it with ``destroy()`` or use it as a
context manager.

Display plugin classes live in a global registry on ``ViewExecutable``
(``register_display`` / ``available_displays``); concrete display modules
register themselves at import time.

``ExecutableFactory.get(view)`` builds executables and raises
``LookupError`` when the view references a display plugin nobody
registered.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from pydantic import ValidationError

from viewroutes.views.displays._base_display import DisplayPlugin
from viewroutes.views.entity import ViewConfig

__all__ = ["DisplayBag", "ExecutableFactory", "ViewExecutable"]

logger = logging.getLogger("viewroutes")

_DISPLAY_REGISTRY: Dict[str, Type[DisplayPlugin]] = {}


class DisplayBag:
    """Display handlers of one executable, instantiated on first access."""

    __slots__ = ("_view", "_handlers")

    def __init__(self, view: "ViewExecutable") -> None:
        self._view = view
        self._handlers: Dict[str, DisplayPlugin] = {}

    def has(self, display_id: str) -> bool:
        return display_id in self._view.storage.display

    def get(self, display_id: str) -> Optional[DisplayPlugin]:
        """Return the handler for ``display_id``, or None for unknown ids.

        Raises:
            pydantic.ValidationError: when the display options are invalid.
        """
        handler = self._handlers.get(display_id)
        if handler is not None:
            return handler
        config = self._view.storage.get_display(display_id)
        if config is None:
            return None
        plugin_class = _DISPLAY_REGISTRY[config.display_plugin]
        handler = plugin_class(self._view, config)
        self._handlers[display_id] = handler
        return handler

    def ids(self) -> List[str]:
        return self._view.storage.display_ids()

    def clear(self) -> None:
        for handler in self._handlers.values():
            handler.destroy()
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)


class ViewExecutable:
    __slots__ = ("storage", "current_display", "display_handler", "displays", "_destroyed")

    def __init__(self, storage: ViewConfig) -> None:
        self.storage = storage
        self.current_display: Optional[str] = None
        self.display_handler: Optional[DisplayPlugin] = None
        self.displays = DisplayBag(self)
        self._destroyed = False

    # ------------------------------------------------------------------
    # Display plugin registry
    # ------------------------------------------------------------------
    @classmethod
    def register_display(cls, plugin_class: Type[DisplayPlugin], name: Optional[str] = None) -> None:
        """Register a display plugin class globally.

        Args:
            plugin_class: A DisplayPlugin subclass with display_code defined.
            name: Optional override code. An explicit name replaces any
                existing registration; otherwise a collision raises.
        """
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, DisplayPlugin):
            raise TypeError("plugin_class must be a DisplayPlugin subclass")
        if not getattr(plugin_class, "display_code", None):
            raise ValueError(f"Display {plugin_class.__name__} is missing display_code")
        code = name or plugin_class.display_code
        if name is None:
            existing = _DISPLAY_REGISTRY.get(code)
            if existing is not None and existing is not plugin_class:
                raise ValueError(f"Display plugin '{code}' already registered")
        _DISPLAY_REGISTRY[code] = plugin_class

    @classmethod
    def available_displays(cls) -> Dict[str, Type[DisplayPlugin]]:
        return dict(_DISPLAY_REGISTRY)

    # ------------------------------------------------------------------
    # Display handling
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self.storage.id

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def set_display(self, display_id: Optional[str] = None) -> bool:
        """Activate ``display_id`` (``default`` when empty).

        Returns False when the display does not exist or its options do not
        validate; the previously active display is then left untouched.
        """
        display_id = display_id or "default"
        if display_id == self.current_display and self.display_handler is not None:
            return True
        if not self.displays.has(display_id):
            logger.debug("view %s has no display %r", self.id, display_id)
            return False
        try:
            handler = self.displays.get(display_id)
        except ValidationError as exc:
            logger.debug("view %s display %r has invalid options: %s", self.id, display_id, exc)
            return False
        self.current_display = display_id
        self.display_handler = handler
        self._destroyed = False
        return True

    def get_display_handler(self, display_id: str) -> Optional[DisplayPlugin]:
        if display_id == self.current_display:
            return self.display_handler
        try:
            return self.displays.get(display_id)
        except ValidationError:
            return None

    def destroy(self) -> None:
        """Release display handlers and per-request state."""
        self.displays.clear()
        self.current_display = None
        self.display_handler = None
        self._destroyed = True

    def __enter__(self) -> "ViewExecutable":
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()


class ExecutableFactory:
    def get(self, view: ViewConfig) -> ViewExecutable:
        missing = sorted(
            {d.display_plugin for d in view.display.values()} - set(_DISPLAY_REGISTRY)
        )
        if missing:
            raise LookupError(f"View '{view.id}' uses unknown display plugin(s): {', '.join(missing)}")
        return ViewExecutable(view)
