"""Routing layer for Waypoint - path patterns, route table, dispatch, URL generation."""

from waypoint.routing.controllers import ControllerRegistry
from waypoint.routing.generation import build_url_from_template
from waypoint.routing.groups import GroupContext
from waypoint.routing.patterns import CompiledPattern, compile_path, match_path
from waypoint.routing.router import Router
from waypoint.routing.routes import (
    ControllerRef,
    HTTPMethod,
    InlineHandler,
    Route,
    RouteMatch,
)

__all__ = [
    "CompiledPattern",
    "ControllerRef",
    "ControllerRegistry",
    "GroupContext",
    "HTTPMethod",
    "InlineHandler",
    "Route",
    "RouteMatch",
    "Router",
    "build_url_from_template",
    "compile_path",
    "match_path",
]
