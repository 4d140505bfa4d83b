"""Logging plugin.

Wraps each listener call and emits:

- ``before`` (default True): ``"{entry.name} start"``
- ``after`` (default True): ``"{entry.name} end (<ms> ms)"`` with the elapsed
  time formatted as ``{elapsed:.2f}``.

Sinks: with ``print`` true the message is printed; otherwise with ``log``
true it goes to ``logger.info`` when the logger has handlers, and to
``print`` when it has none so messages are not dropped. ``enabled`` gates the
plugin. The logger defaults to ``logging.getLogger("viewroutes")``.

Options are accepted table wide (``hooks.logging.configure(after=False)``),
per listener (``configure(_target="on_html_page", before=False)``), through
flags (``"before:off,after:on"``) or as ``logging_<key>`` options on
``subscribe``. Exceptions propagate; the end message is skipped when the
listener raises.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from viewroutes.core.hooks import Hooks
from viewroutes.plugins._base_plugin import BasePlugin, HookEntry

_DEFAULTS = {"enabled": True, "before": True, "after": True, "log": True, "print": False}


class LoggingPlugin(BasePlugin):
    """Logs listener calls with timing."""

    plugin_code = "logging"
    plugin_description = "Logs listener calls with timing"

    __slots__ = ("_logger",)

    def __init__(self, hooks, *, logger: Optional[logging.Logger] = None, **cfg):
        self._logger = logger or logging.getLogger("viewroutes")
        super().__init__(hooks, **cfg)

    def configure(
        self,
        enabled: bool = True,
        before: bool = True,
        after: bool = True,
        log: bool = True,
        print: bool = False,  # noqa: A002 - option name mirrors the sink
    ):
        pass  # Storage is handled by the wrapper

    def _emit(self, message: str, *, cfg: dict) -> None:
        if cfg["print"]:
            print(message)
            return
        if cfg["log"]:
            if self._logger.hasHandlers():
                self._logger.info(message)
            else:
                print(message)

    def wrap_handler(self, hooks, entry: HookEntry, call_next: Callable):
        def logged(*args, **kwargs):
            cfg = self._effective_config(entry.name)
            if not cfg["enabled"]:
                return call_next(*args, **kwargs)
            if cfg["before"]:
                self._emit(f"{entry.name} start", cfg=cfg)
            t0 = time.perf_counter()
            result = call_next(*args, **kwargs)
            elapsed = (time.perf_counter() - t0) * 1000
            if cfg["after"]:
                self._emit(f"{entry.name} end ({elapsed:.2f} ms)", cfg=cfg)
            return result

        return logged

    def _effective_config(self, entry_name: str) -> dict:
        cfg = _DEFAULTS | self.configuration(entry_name)
        flags = cfg.pop("flags", None)
        if isinstance(flags, str):
            cfg.update(self._parse_flags(flags))
        return {key: default if cfg.get(key) is None else bool(cfg[key]) for key, default in _DEFAULTS.items()}


Hooks.register_plugin(LoggingPlugin)
