"""Route table, rebuild orchestration and the route subscriber base class."""

from .builder import DYNAMIC_PROVIDER, RouteBuilder
from .route import Route, RouteCollection, load_routes, path_variables
from .subscriber_base import RouteSubscriberBase

__all__ = [
    "DYNAMIC_PROVIDER",
    "Route",
    "RouteBuilder",
    "RouteCollection",
    "RouteSubscriberBase",
    "load_routes",
    "path_variables",
]
