"""Plugin-free listener table bound to a subscriber instance.

The module exposes :class:`BaseHooks`, which binds the methods an object marks
with :func:`viewroutes.core.decorators.subscribe`, keeps them under logical
names and reports them as prioritized event listeners. Subclasses add the
plugin pipeline but must preserve these semantics.

Constructor
-----------
::

    BaseHooks(owner, name=None, prefix=None, *,
              get_default_handler=None, get_use_smartasync=None,
              get_kwargs=None, auto_discover=True)

- ``owner`` is required; ``None`` raises ``ValueError``. A table is bound to
  its owner for life.
- ``get_default_handler`` and ``get_use_smartasync`` become defaults merged
  with the options of ``get()`` through ``SmartOptions``; extra
  ``get_kwargs`` are copied into the same defaults.
- On init the table registers with the owner through the optional
  ``_register_hooks`` hook, then binds the marked methods when
  ``auto_discover`` is true.

Registration
------------
``add_entry(target, *, event=None, priority=None, name=None, replace=False,
**options)`` accepts a callable, the name of an attribute of the owner, or
``"*"`` for every marked method. Each listener needs an ``event``, else
``ValueError``. ``<plugin>_<key>`` options naming a registered plugin become
per-listener plugin config. Logical names are unique unless ``replace=True``.

Marked methods are looked up through the owner's MRO starting from
``object``, so listeners declared on a base class are bound for every
subclass instance; a function reached twice is bound once.

Lookup
------
``get(name, **options)`` returns the (wrapped) handler, the default handler,
or raises ``NotImplementedError``. With ``use_smartasync`` the handler is
passed through ``smartasync.smartasync``. ``listeners(event=None)`` returns
``(event, priority, name)`` triples in registration order.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from smartseeds import SmartOptions

from viewroutes.plugins._base_plugin import HookEntry

__all__ = ["BaseHooks", "TARGET_ATTR_NAME", "HOOKS_REGISTRY_ATTR_NAME"]

TARGET_ATTR_NAME = "__viewroutes_targets__"
HOOKS_REGISTRY_ATTR_NAME = "__viewroutes_hooks_registry__"


class BaseHooks:
    """Plugin-free listener table bound to an object instance."""

    __slots__ = (
        "instance",
        "name",
        "prefix",
        "_entries",
        "_handlers",
        "_get_defaults",
    )

    def __init__(
        self,
        owner: Any,
        name: Optional[str] = None,
        prefix: Optional[str] = None,
        *,
        get_default_handler: Optional[Callable] = None,
        get_use_smartasync: Optional[bool] = None,
        get_kwargs: Optional[Dict[str, Any]] = None,
        auto_discover: bool = True,
    ) -> None:
        if owner is None:
            raise ValueError("Hooks require an owner instance")
        self.instance = owner
        self.name = name
        self.prefix = prefix or ""
        self._entries: Dict[str, HookEntry] = {}
        self._handlers: Dict[str, Callable] = {}
        defaults: Dict[str, Any] = dict(get_kwargs or {})
        if get_default_handler is not None:
            defaults.setdefault("default_handler", get_default_handler)
        if get_use_smartasync is not None:
            defaults.setdefault("use_smartasync", get_use_smartasync)
        self._get_defaults: Dict[str, Any] = defaults
        hook = getattr(owner, "_register_hooks", None)
        if callable(hook):
            hook(self)
        if auto_discover:
            self.add_entry("*")

    def _is_known_plugin(self, prefix: str) -> bool:
        return False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_entry(
        self,
        target: Any,
        *,
        event: Optional[str] = None,
        priority: Optional[int] = None,
        name: Optional[str] = None,
        replace: bool = False,
        **options: Any,
    ) -> "BaseHooks":
        """Register a listener on this table.

        Args:
            target: Callable, attribute name of the owner, or ``"*"``.
            event: Event name the listener reacts to (required unless marked).
            priority: Dispatch priority; higher runs first. Defaults to 0.
            name: Logical name override.
            replace: Allow overwriting an existing logical name.

        Returns:
            self (to allow chaining).

        Raises:
            ValueError: on name collision or when no event is known.
            AttributeError: when the owner has no attribute ``target``.
            TypeError: on unsupported target type.
        """
        overrides = dict(options)
        if event is not None:
            overrides["event"] = event
        if priority is not None:
            overrides["priority"] = priority

        if isinstance(target, str) and target.strip() == "*":
            for func, marker in self._marked_methods():
                listener = name or marker.pop("entry_name", None)
                self._register(self._bind(func), {**marker, **overrides}, listener, replace)
            return self
        if isinstance(target, str):
            bound = getattr(self.instance, target.strip())
        elif callable(target):
            bound = self._bind(target)
        else:
            raise TypeError(f"Unsupported add_entry target: {target!r}")
        self._register(bound, overrides, name, replace)
        return self

    def _bind(self, func: Callable) -> Callable:
        if inspect.isfunction(func):
            return func.__get__(self.instance, type(self.instance))
        return func

    def _register(
        self, bound: Callable, options: Dict[str, Any], name: Optional[str], replace: bool
    ) -> None:
        listener = name or self._strip_prefix(bound.__name__)
        if listener in self._entries and not replace:
            raise ValueError(f"Listener name collision: {listener}")
        metadata, plugin_config = self._split_options(options)
        if not metadata.get("event"):
            raise ValueError(f"Listener '{listener}' has no event")
        metadata["priority"] = int(metadata.get("priority", 0))
        if plugin_config:
            metadata["plugin_config"] = plugin_config
        entry = HookEntry(name=listener, func=bound, hooks=self, plugins=[], metadata=metadata)
        self._entries[listener] = entry
        self._after_entry_registered(entry)
        self._rebuild_handlers()

    def _split_options(
        self, options: Dict[str, Any]
    ) -> Tuple[Dict[str, Any], Dict[str, Dict[str, Any]]]:
        """Separate ``<plugin>_<key>`` options from listener metadata."""
        metadata: Dict[str, Any] = {}
        plugin_config: Dict[str, Dict[str, Any]] = {}
        for key, value in options.items():
            plugin, _, option = key.partition("_")
            if option and self._is_known_plugin(plugin):
                plugin_config.setdefault(plugin, {})[option] = value
            else:
                metadata[key] = value
        return metadata, plugin_config

    def _marked_methods(self) -> Iterator[Tuple[Callable, Dict[str, Any]]]:
        seen = set()
        for klass in reversed(type(self.instance).__mro__):
            for attr in vars(klass).values():
                if not inspect.isfunction(attr) or attr in seen:
                    continue
                seen.add(attr)
                for marker in getattr(attr, TARGET_ATTR_NAME, ()):
                    if marker.get("name") == self.name:
                        yield attr, {key: value for key, value in marker.items() if key != "name"}

    def _strip_prefix(self, func_name: str) -> str:
        if self.prefix and func_name.startswith(self.prefix):
            return func_name[len(self.prefix) :]
        return func_name

    def _after_entry_registered(self, entry: HookEntry) -> None:
        """Subclass hook run once per new listener."""

    def _wrap_handler(self, entry: HookEntry, call_next: Callable) -> Callable:
        return call_next

    def _rebuild_handlers(self) -> None:
        self._handlers = {
            listener: self._wrap_handler(entry, entry.func)
            for listener, entry in self._entries.items()
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, name: str, **options: Any) -> Callable:
        """Return the handler registered under ``name``.

        Falls back to ``default_handler`` if provided, otherwise raises
        NotImplementedError. When ``use_smartasync`` is true, the handler is
        wrapped accordingly.
        """
        opts = SmartOptions(options, defaults=self._get_defaults)
        handler = self._handlers.get(name) or getattr(opts, "default_handler", None)
        if handler is None:
            raise NotImplementedError(f"Listener '{name}' not found on hooks '{self.name}'")
        if getattr(opts, "use_smartasync", False):
            from smartasync import smartasync  # type: ignore

            handler = smartasync(handler)
        return handler

    def entry(self, name: str) -> HookEntry:
        return self._entries[name]

    def listeners(self, event: Optional[str] = None) -> List[Tuple[str, int, str]]:
        """Return ``(event, priority, name)`` for every listener, in registration order."""
        return [
            (entry.event, entry.priority, entry.name)
            for entry in self._entries.values()
            if event is None or entry.event == event
        ]
