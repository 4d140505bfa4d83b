"""View configuration, executables and the view route subscriber."""

from .applicable import get_applicable_views
from .area import HttpStatusArea
from .candidates import ViewCandidateIndex, ViewDisplayPair
from .entity import DisplayConfig, ViewConfig, ViewStorage
from .executable import ExecutableFactory, ViewExecutable
from .route_names import VIEW_ROUTE_NAMES_KEY, RouteNameRegistry
from .route_subscriber import RouteSubscriber
from .url import ViewUrlGenerator

__all__ = [
    "DisplayConfig",
    "ExecutableFactory",
    "HttpStatusArea",
    "RouteNameRegistry",
    "RouteSubscriber",
    "VIEW_ROUTE_NAMES_KEY",
    "ViewCandidateIndex",
    "ViewConfig",
    "ViewDisplayPair",
    "ViewExecutable",
    "ViewStorage",
    "ViewUrlGenerator",
    "get_applicable_views",
]
