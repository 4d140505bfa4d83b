"""Tests for the candidate index and the route name registry."""

import pytest

from viewroutes import MemoryState
from viewroutes.views import (
    VIEW_ROUTE_NAMES_KEY,
    RouteNameRegistry,
    ViewCandidateIndex,
    ViewDisplayPair,
)


class FakeExecutable:
    def __init__(self, view_id):
        self.id = view_id
        self.destroyed = False

    def destroy(self):
        self.destroyed = True


class CountingLister:
    def __init__(self, *pairs):
        self.pairs = list(pairs)
        self.calls = 0
        self.executables = []

    def __call__(self):
        self.calls += 1
        result = []
        for view_id, display_id in self.pairs:
            executable = FakeExecutable(view_id)
            self.executables.append(executable)
            result.append((executable, display_id))
        return result


def test_pair_key_and_parse():
    pair = ViewDisplayPair.parse("frontpage.page_1")

    assert pair == ViewDisplayPair("frontpage", "page_1")
    assert pair.key == "frontpage.page_1"
    assert str(pair) == "frontpage.page_1"
    for bad in ("frontpage", ".page_1", "frontpage."):
        with pytest.raises(ValueError):
            ViewDisplayPair.parse(bad)


def test_index_is_lazy_and_cached():
    lister = CountingLister(("b", "1"), ("a", "1"))
    index = ViewCandidateIndex(lister)

    assert index.loaded is False
    assert lister.calls == 0
    first = index.get_candidates()
    assert list(first) == ["a.1", "b.1"]
    assert index.get_candidates() is first
    assert lister.calls == 1
    assert all(executable.destroyed for executable in lister.executables)


def test_index_reset_and_discard():
    lister = CountingLister(("a", "1"), ("b", "1"))
    index = ViewCandidateIndex(lister)

    index.get_candidates()
    index.discard("a.1")
    index.discard("missing.1")
    assert list(index.get_candidates()) == ["b.1"]

    index.reset()
    assert index.loaded is False
    assert list(index.get_candidates()) == ["a.1", "b.1"]
    assert lister.calls == 2


def test_discard_before_load_is_a_no_op():
    index = ViewCandidateIndex(CountingLister(("a", "1")))

    index.discard("a.1")
    assert list(index.get_candidates()) == ["a.1"]


def test_registry_merge_rules():
    registry = RouteNameRegistry(MemoryState())

    registry.merge({"a.1": "route_x"})
    registry.merge({"a.1": "route_z", "b.1": "route_b"})
    registry.merge_claims({"a.1": "route_y", "c.1": "route_c"})
    registry.merge(None)
    assert registry.as_dict() == {"a.1": "route_z", "b.1": "route_b", "c.1": "route_c"}
    assert registry.route_name("c", "1") == "route_c"
    assert registry.route_name("d", "1") is None
    assert len(registry) == 3


def test_registry_persist_and_load():
    state = MemoryState()
    registry = RouteNameRegistry(state)
    registry.merge({"a.1": "r1"})

    registry.persist()
    assert state.get(VIEW_ROUTE_NAMES_KEY) == {"a.1": "r1"}

    registry.clear()
    assert "a.1" not in registry
    assert registry.load() == {"a.1": "r1"}
    assert "a.1" in registry
