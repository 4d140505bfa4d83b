"""Listing of views whose displays declare a given capability."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from viewroutes.views.entity import ViewStorage
from viewroutes.views.executable import ExecutableFactory, ViewExecutable

__all__ = ["get_applicable_views"]

logger = logging.getLogger("viewroutes")


def get_applicable_views(
    storage: ViewStorage, capability: str, factory: Optional[ExecutableFactory] = None
) -> List[Tuple[ViewExecutable, str]]:
    """Return ``(executable, display_id)`` for every enabled display of an
    enabled view whose display plugin sets ``capability`` to a truthy value.

    Each pair gets its own executable with the display already activated.
    Views referencing unregistered display plugins are skipped.
    """
    factory = factory or ExecutableFactory()
    plugins = ViewExecutable.available_displays()
    result: List[Tuple[ViewExecutable, str]] = []
    for view_id in storage.ids():
        view = storage.load(view_id)
        if view is None or not view.status:
            continue
        for display_id in view.display_ids():
            display = view.display[display_id]
            plugin_class = plugins.get(display.display_plugin)
            if plugin_class is None or not display.enabled:
                continue
            if not getattr(plugin_class, capability, False):
                continue
            try:
                executable = factory.get(view)
            except LookupError as exc:
                logger.debug("skipping view %s: %s", view_id, exc)
                break
            executable.set_display(display_id)
            result.append((executable, display_id))
    return result
