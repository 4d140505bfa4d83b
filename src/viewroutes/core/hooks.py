"""Listener table with plugin pipeline.

``Hooks`` extends ``BaseHooks`` with a global plugin registry, per-table
plugin instances, middleware wrapping and plugin state stored on the table.

Internal state
--------------
- ``_plugins``: instantiated plugins in the order they were attached.
- ``_plugins_by_name``: code → plugin instance.
- ``_plugin_info``: per-plugin store; a ``"--base--"`` bucket holds table
  level config and one bucket per listener holds overrides. Each bucket has
  ``config`` and ``locals``.

Global registry
---------------
``Hooks.register_plugin(plugin_class, name=None)`` requires a ``BasePlugin``
subclass with ``plugin_code``. Registering another class under an existing
code raises ``ValueError`` unless ``name`` is passed explicitly.
``available_plugins()`` returns a shallow copy of the registry.

Attaching plugins
-----------------
``plug(code, **config)`` instantiates the registered class, runs
``on_decore`` over existing entries, rebuilds handlers and returns ``self``.
Attached plugins are reachable as attributes (``hooks.logging``); unknown
attributes raise ``AttributeError``.

Runtime switch
--------------
``set_plugin_enabled(listener, code, enabled)`` writes ``enabled`` into the
listener bucket's ``locals``; ``is_plugin_enabled`` reads it back, falling
back to the table bucket and then to ``True``.

Wrapping
--------
Layers are built from the handler outwards, so the first attached plugin is
the outermost one. Each layer checks ``is_plugin_enabled`` on every call and
hands the call straight to the inner layer while its plugin is off.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Type

from viewroutes.core.base_hooks import BaseHooks
from viewroutes.plugins._base_plugin import BASE_BUCKET, BasePlugin, HookEntry

__all__ = ["Hooks"]

_PLUGIN_REGISTRY: Dict[str, Type[BasePlugin]] = {}


def _new_bucket() -> Dict[str, Dict[str, Any]]:
    return {"config": {}, "locals": {}}


class Hooks(BaseHooks):
    """Listener table with plugin registry/pipeline support."""

    __slots__ = BaseHooks.__slots__ + (
        "_plugins",
        "_plugins_by_name",
        "_plugin_info",
    )

    def __init__(self, *args, **kwargs):
        self._plugins: List[BasePlugin] = []
        self._plugins_by_name: Dict[str, BasePlugin] = {}
        self._plugin_info: Dict[str, Dict[str, Any]] = {}
        super().__init__(*args, **kwargs)

    # ------------------------------------------------------------------
    # Plugin registration
    # ------------------------------------------------------------------
    @classmethod
    def register_plugin(cls, plugin_class: Type[BasePlugin], name: Optional[str] = None) -> None:
        """Register a plugin class globally.

        Args:
            plugin_class: A BasePlugin subclass with plugin_code defined.
            name: Optional override code. An explicit name replaces any
                existing registration; otherwise a collision raises.
        """
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
            raise TypeError("plugin_class must be a BasePlugin subclass")
        if not getattr(plugin_class, "plugin_code", None):
            raise ValueError(f"Plugin {plugin_class.__name__} is missing plugin_code")
        code = name or plugin_class.plugin_code
        if name is None:
            existing = _PLUGIN_REGISTRY.get(code)
            if existing is not None and existing is not plugin_class:
                raise ValueError(f"Plugin '{code}' already registered")
        _PLUGIN_REGISTRY[code] = plugin_class

    @classmethod
    def available_plugins(cls) -> Dict[str, Type[BasePlugin]]:
        return dict(_PLUGIN_REGISTRY)

    def _is_known_plugin(self, prefix: str) -> bool:
        return prefix in _PLUGIN_REGISTRY

    def plug(self, plugin: str, **config: Any) -> "Hooks":
        """Attach a plugin by its registered code."""
        if not isinstance(plugin, str):
            raise TypeError(
                f"Plugin must be referenced by name string, got {type(plugin).__name__}"
            )
        plugin_class = _PLUGIN_REGISTRY.get(plugin)
        if plugin_class is None:
            available = ", ".join(sorted(_PLUGIN_REGISTRY)) or "none"
            raise ValueError(f"Unknown plugin '{plugin}'. Available plugins: {available}")
        instance = plugin_class(self, **config)
        self._plugins.append(instance)
        self._plugins_by_name[instance.name] = instance
        for entry in self._entries.values():
            self._decorate(instance, entry)
        self._rebuild_handlers()
        return self

    def __getattr__(self, name: str) -> Any:
        plugin = self._plugins_by_name.get(name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{name}' attached to hooks '{self.name}'")
        return plugin

    def _require_bucket(self, plugin_name: str) -> Dict[str, Any]:
        bucket = self._plugin_info.get(plugin_name)
        if bucket is None:
            raise AttributeError(
                f"No plugin named '{plugin_name}' attached to hooks '{self.name}'"
            )
        bucket.setdefault(BASE_BUCKET, _new_bucket())
        return bucket

    # ------------------------------------------------------------------
    # Runtime switch (stored in the listener bucket's locals)
    # ------------------------------------------------------------------
    def set_plugin_enabled(self, listener: str, plugin_name: str, enabled: bool = True) -> None:
        bucket = self._require_bucket(plugin_name)
        bucket.setdefault(listener, _new_bucket())["locals"]["enabled"] = bool(enabled)

    def is_plugin_enabled(self, listener: str, plugin_name: str) -> bool:
        bucket = self._require_bucket(plugin_name)
        for key in (listener, BASE_BUCKET):
            local_state = bucket.get(key, {}).get("locals", {})
            if "enabled" in local_state:
                return bool(local_state["enabled"])
        return True

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def _wrap_handler(self, entry: HookEntry, call_next: Callable) -> Callable:  # type: ignore[override]
        handler = call_next
        for plugin in reversed(self._plugins):
            handler = self._layer(plugin, entry, handler)
        return handler

    def _layer(self, plugin: BasePlugin, entry: HookEntry, inner: Callable) -> Callable:
        active = plugin.wrap_handler(self, entry, inner)

        @wraps(inner)
        def layer(*args, **kwargs):
            if self.is_plugin_enabled(entry.name, plugin.name):
                return active(*args, **kwargs)
            return inner(*args, **kwargs)

        return layer

    def _after_entry_registered(self, entry: HookEntry) -> None:  # type: ignore[override]
        for code, config in entry.metadata.get("plugin_config", {}).items():
            bucket = self._plugin_info.setdefault(code, {})
            bucket.setdefault(entry.name, _new_bucket())["config"].update(config)
        for plugin in self._plugins:
            self._decorate(plugin, entry)

    def _decorate(self, plugin: BasePlugin, entry: HookEntry) -> None:
        if plugin.name not in entry.plugins:
            entry.plugins.append(plugin.name)
        plugin.on_decore(self, entry.func, entry)
