from waypoint.config import RouterConfig
from waypoint.exception_handlers import ErrorPage, render_error_page
from waypoint.exceptions import (
    HandlerUnresolvableException,
    RouteNotFoundException,
    WaypointConfigError,
    WaypointException,
)
from waypoint.routing import ControllerRegistry, Route, RouteMatch, Router

__all__ = [
    "ControllerRegistry",
    "ErrorPage",
    "HandlerUnresolvableException",
    "Route",
    "RouteMatch",
    "RouteNotFoundException",
    "Router",
    "RouterConfig",
    "WaypointConfigError",
    "WaypointException",
    "render_error_page",
]
