"""Hook plugin contract used by the ``Hooks`` runtime.

Objects
~~~~~~~
``HookEntry``
    Dataclass capturing listener metadata at registration time. Fields:

    - ``name`` – logical listener name (after prefix stripping)
    - ``func`` – bound callable invoked on dispatch
    - ``hooks`` – ``Hooks`` table that owns the listener
    - ``plugins`` – plugin codes applied to the listener (order matters)
    - ``metadata`` – mutable dict; always holds ``event`` and ``priority``

``BasePlugin``
    Base class every hook plugin subclasses. Class attributes
    ``plugin_code`` (registration key) and ``plugin_description`` are
    required. ``BasePlugin(hooks, **config)`` seeds the plugin bucket in the
    owning table's ``_plugin_info`` store and calls ``configure(**config)``.

    ``configure`` declares accepted options through its signature. When a
    subclass defines it, ``__init_subclass__`` wraps it so that:

    - ``flags`` strings (``"enabled,before:off"``) become booleans;
    - ``_target`` selects the bucket: ``"--base--"`` (table level), a listener
      name, or a comma separated list of listener names;
    - options are checked with pydantic ``validate_call`` before they are
      written to the store.

    ``configuration(listener=None)`` merges table level config with the
    per-listener override. ``on_decore`` runs once per registered listener;
    ``wrap_handler`` returns the middleware layer (identity by default).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import validate_call

__all__ = ["BasePlugin", "HookEntry", "BASE_BUCKET"]

BASE_BUCKET = "--base--"


@dataclass
class HookEntry:
    """Metadata for a registered listener."""

    name: str
    func: Callable
    hooks: Any
    plugins: List[str]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def event(self) -> str:
        return self.metadata["event"]

    @property
    def priority(self) -> int:
        return int(self.metadata.get("priority", 0))


def _wrap_configure(original_configure: Callable) -> Callable:
    validated = validate_call(original_configure)

    def wrapper(
        self: "BasePlugin", *, _target: str = BASE_BUCKET, flags: Optional[str] = None, **kwargs: Any
    ) -> None:
        if flags:
            kwargs.update(self._parse_flags(flags))
        if "," in _target:
            for target in (t.strip() for t in _target.split(",")):
                if target:
                    wrapper(self, _target=target, **kwargs)
            return
        validated(self, **kwargs)
        self._write_config(_target, kwargs)

    return wrapper


class BasePlugin:
    """Hook interface + configuration helpers for hook plugins."""

    __slots__ = ("name", "_hooks")

    plugin_code: str = ""
    plugin_description: str = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "configure" in cls.__dict__:
            cls.configure = _wrap_configure(cls.__dict__["configure"])

    def __init__(self, hooks: Any, **config: Any):
        self.name = self.plugin_code
        self._hooks = hooks
        self._get_store().setdefault(self.name, {}).setdefault(
            BASE_BUCKET, {"config": {"enabled": True}, "locals": {}}
        )
        self.configure(**config)

    def configure(self, *, _target: str = BASE_BUCKET, flags: Optional[str] = None) -> None:
        """Accept only ``flags``; subclasses declare their own options."""
        if flags:
            self._write_config(_target, self._parse_flags(flags))

    def _write_config(self, target: str, config: Dict[str, Any]) -> None:
        if not config:
            return
        bucket = self._get_store().setdefault(self.name, {}).setdefault(
            target, {"config": {}, "locals": {}}
        )
        bucket["config"].update(config)

    def configuration(self, listener: Optional[str] = None) -> Dict[str, Any]:
        """Read merged configuration (table level + optional listener override)."""
        plugin_bucket = self._get_store().get(self.name)
        if not plugin_bucket:
            return {}
        merged = dict(plugin_bucket.get(BASE_BUCKET, {}).get("config") or {})
        if listener:
            merged.update(plugin_bucket.get(listener, {}).get("config") or {})
        return merged

    def _parse_flags(self, flags: str) -> Dict[str, bool]:
        mapping: Dict[str, bool] = {}
        for chunk in flags.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if ":" in chunk:
                name, value = chunk.split(":", 1)
                mapping[name.strip()] = value.strip().lower() != "off"
            else:
                mapping[chunk] = True
        return mapping

    def on_decore(
        self, hooks: Any, func: Callable, entry: HookEntry
    ) -> None:  # pragma: no cover - default no-op
        """Hook run when the listener is registered."""

    def wrap_handler(self, hooks: Any, entry: HookEntry, call_next: Callable) -> Callable:
        """Wrap listener invocation; default passthrough."""
        return call_next

    def _get_store(self) -> Dict[str, Any]:
        return getattr(self._hooks, "_plugin_info")
