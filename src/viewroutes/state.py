"""Key-value state stores.

State holds small values that must survive a process restart, such as the
route name index written after every rebuild. Writes are last-writer-wins
overwrites of a single key.

- ``MemoryState`` keeps values in a dict (tests, single process use).
- ``SqliteState`` keeps JSON-encoded values in one ``key_value`` table;
  values must therefore be JSON serializable.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Protocol, Union, runtime_checkable

__all__ = ["MemoryState", "SqliteState", "StateStore"]


@runtime_checkable
class StateStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryState:
    __slots__ = ("_values",)

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def get_multiple(self, keys: Iterable[str]) -> Dict[str, Any]:
        return {key: self._values[key] for key in keys if key in self._values}

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class SqliteState:
    """SQLite backed state; one connection per store, autocommit writes."""

    __slots__ = ("_conn",)

    _SCHEMA = "CREATE TABLE IF NOT EXISTS key_value (name TEXT PRIMARY KEY, value TEXT NOT NULL)"

    def __init__(self, path: Union[str, Path] = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), isolation_level=None)
        self._conn.execute(self._SCHEMA)

    def get(self, key: str, default: Any = None) -> Any:
        row = self._conn.execute("SELECT value FROM key_value WHERE name = ?", (key,)).fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    def get_multiple(self, keys: Iterable[str]) -> Dict[str, Any]:
        found: Dict[str, Any] = {}
        for key in keys:
            row = self._conn.execute(
                "SELECT value FROM key_value WHERE name = ?", (key,)
            ).fetchone()
            if row is not None:
                found[key] = json.loads(row[0])
        return found

    def set(self, key: str, value: Any) -> None:
        self._conn.execute(
            "INSERT INTO key_value (name, value) VALUES (?, ?) "
            "ON CONFLICT(name) DO UPDATE SET value = excluded.value",
            (key, json.dumps(value)),
        )

    def delete(self, key: str) -> None:
        self._conn.execute("DELETE FROM key_value WHERE name = ?", (key,))

    def close(self) -> None:
        self._conn.close()
