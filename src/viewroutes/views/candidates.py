"""View/display pairs that may own a route, and their lazily built index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

__all__ = ["ViewCandidateIndex", "ViewDisplayPair"]


@dataclass(frozen=True, order=True)
class ViewDisplayPair:
    view_id: str
    display_id: str

    @property
    def key(self) -> str:
        return f"{self.view_id}.{self.display_id}"

    @classmethod
    def parse(cls, key: str) -> "ViewDisplayPair":
        """Build a pair from its ``"{view_id}.{display_id}"`` form."""
        view_id, sep, display_id = key.partition(".")
        if not sep or not view_id or not display_id:
            raise ValueError(f"Malformed view/display key: {key!r}")
        return cls(view_id, display_id)

    def __str__(self) -> str:
        return self.key


class ViewCandidateIndex:
    """Memoized set of route candidates.

    ``lister`` returns ``(executable, display_id)`` tuples; only the ids are
    kept and each executable is destroyed right away. The set stays cached
    until ``reset()``; ``discard()`` removes single pairs from the live set.
    """

    __slots__ = ("_lister", "_pairs")

    def __init__(self, lister: Callable[[], Iterable[Tuple[Any, str]]]) -> None:
        self._lister = lister
        self._pairs: Optional[Dict[str, ViewDisplayPair]] = None

    @property
    def loaded(self) -> bool:
        return self._pairs is not None

    def get_candidates(self) -> Dict[str, ViewDisplayPair]:
        if self._pairs is None:
            pairs: Dict[str, ViewDisplayPair] = {}
            for executable, display_id in self._lister():
                pair = ViewDisplayPair(executable.id, display_id)
                pairs[pair.key] = pair
                executable.destroy()
            self._pairs = dict(sorted(pairs.items()))
        return self._pairs

    def discard(self, key: str) -> None:
        if self._pairs is not None:
            self._pairs.pop(key, None)

    def reset(self) -> None:
        self._pairs = None
