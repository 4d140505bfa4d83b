"""
Example showing a route rebuild driven by stored views, with logged listeners.
"""

from __future__ import annotations

from viewroutes import (
    EventDispatcher,
    MemoryState,
    RouteBuilder,
    RouteSubscriber,
    ViewStorage,
    ViewUrlGenerator,
)
from viewroutes.routing import load_routes

VIEWS = [
    {
        "id": "frontpage",
        "label": "Frontpage",
        "display": {
            "page_1": {"display_plugin": "page", "display_options": {"path": "node"}},
            "feed_1": {"display_plugin": "feed", "display_options": {"path": "rss.xml"}},
        },
    },
    {
        "id": "taxonomy_term",
        "display": {
            "page_1": {
                "display_plugin": "page",
                "display_options": {"path": "taxonomy/term/%", "arguments": {"tid": {}, "depth": {}}},
            },
        },
    },
]

SYSTEM_ROUTES = {
    "system.front": {"path": "/node"},
    "entity.taxonomy_term.canonical": {"path": "/taxonomy/term/{taxonomy_term}"},
}


def main() -> None:
    state = MemoryState()
    subscriber = RouteSubscriber(ViewStorage(VIEWS), state)
    subscriber.events.plug("logging", print=True)

    dispatcher = EventDispatcher()
    dispatcher.add_subscriber(subscriber)
    routes = RouteBuilder(dispatcher, {"system": load_routes(SYSTEM_ROUTES)}).rebuild()

    for name, route in routes.items():
        print(f"{name:35} {route.path}")
    urls = ViewUrlGenerator(state, routes)
    print(urls.url("taxonomy_term", "page_1", 4))


if __name__ == "__main__":
    main()
