"""Tests for routes and the route table."""

import pytest

from viewroutes.routing import Route, RouteCollection, load_routes, path_variables


def test_route_path_is_normalized():
    assert Route("admin/content").path == "/admin/content"
    assert Route("/admin/content").path == "/admin/content"
    assert Route("").path == "/"


def test_route_variables_and_lookups():
    route = Route("/node/{node}/revisions/{rev}", defaults={"rev": "latest"}, options={"x": 1})

    assert route.variables == ["node", "rev"]
    assert route.get_default("rev") == "latest"
    assert route.get_default("node", "none") == "none"
    assert route.get_option("x") == 1
    assert path_variables("/plain") == []


def test_collection_keeps_insertion_order_and_moves_replaced_names():
    collection = RouteCollection()
    collection.add("a", Route("/a"))
    collection.add("b", Route("/b"))
    collection.add("a", Route("/a2"))

    assert collection.names() == ("b", "a")
    assert collection.get("a").path == "/a2"
    assert len(collection) == 2
    assert "b" in collection and "missing" not in collection


def test_collection_rejects_non_routes():
    collection = RouteCollection()

    with pytest.raises(TypeError):
        collection.add("a", "/a")  # type: ignore[arg-type]


def test_collection_remove_and_merge():
    first = RouteCollection({"a": Route("/a"), "b": Route("/b")})
    second = RouteCollection({"b": Route("/other-b"), "c": Route("/c")})

    first.add_collection(second)
    assert first.names() == ("a", "b", "c")
    assert first.get("b").path == "/other-b"

    first.remove("a", "missing")
    assert list(first) == ["b", "c"]
    assert first.get("a") is None


def test_items_iterates_over_a_snapshot():
    collection = RouteCollection({"a": Route("/a"), "b": Route("/b")})

    for name, route in collection.items():
        collection.add(f"{name}-copy", Route(route.path + "/copy"))

    assert collection.names() == ("a", "b", "a-copy", "b-copy")


def test_load_routes_from_plain_definitions():
    collection = load_routes(
        {
            "user.page": {"path": "/user/{user}", "requirements": {"user": r"\d+"}},
            "front": {"path": "/node", "defaults": {"_controller": "front"}},
        }
    )

    assert collection.names() == ("user.page", "front")
    assert collection.get("user.page").requirements == {"user": r"\d+"}
    assert collection.get("front").get_default("_controller") == "front"
    with pytest.raises(TypeError):
        load_routes({"bad": {"path": "/x", "methods": ["GET"]}})
