"""Minimal request and page objects seen by view-backed controllers."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

__all__ = ["HtmlPage", "ParameterBag", "Request"]


class ParameterBag:
    """Mutable attribute container with ``has``/``get``/``set``."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def all(self) -> Dict[str, Any]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


class Request:
    __slots__ = ("path", "method", "attributes")

    def __init__(
        self, path: str = "/", method: str = "GET", attributes: Optional[Dict[str, Any]] = None
    ) -> None:
        self.path = path
        self.method = method.upper()
        self.attributes = ParameterBag(attributes)


class HtmlPage:
    """A renderable page result; the kernel turns it into a response later."""

    __slots__ = ("content", "title", "status_code")

    def __init__(self, content: str = "", title: str = "", status_code: int = 200) -> None:
        self.content = content
        self.title = title
        self.status_code = status_code

    def set_status_code(self, status_code: int) -> "HtmlPage":
        self.status_code = int(status_code)
        return self
