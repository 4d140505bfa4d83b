"""Event names and event payloads exchanged over the dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from viewroutes.http import Request
    from viewroutes.routing.route import RouteCollection

__all__ = [
    "ControllerResultEvent",
    "Event",
    "KernelEvents",
    "RouteBuildEvent",
    "RoutingEvents",
]


class KernelEvents:
    VIEW = "kernel.view"


class RoutingEvents:
    """Events of a route rebuild cycle, in the order they are dispatched."""

    DYNAMIC = "route.dynamic"
    ALTER = "route.alter"
    FINISHED = "route.finished"


class Event:
    __slots__ = ("_propagation_stopped",)

    def __init__(self) -> None:
        self._propagation_stopped = False

    @property
    def propagation_stopped(self) -> bool:
        return self._propagation_stopped

    def stop_propagation(self) -> None:
        self._propagation_stopped = True


class RouteBuildEvent(Event):
    """Carries the collection being built and the route source it belongs to."""

    __slots__ = ("collection", "provider")

    def __init__(self, collection: "RouteCollection", provider: Optional[str] = None) -> None:
        super().__init__()
        self.collection = collection
        self.provider = provider


class ControllerResultEvent(Event):
    """Raised when a controller returned something that is not a response yet."""

    __slots__ = ("request", "controller_result", "response")

    def __init__(self, request: Optional["Request"], controller_result: Any) -> None:
        super().__init__()
        self.request = request
        self.controller_result = controller_result
        self.response: Any = None
