"""Route resolution logic for Waypoint routing.

Compiled routes are walked in registration order; the first route whose method
and pattern both match the request wins. There is no specificity scoring.
"""

import logging
from collections.abc import Iterable, Sequence

from waypoint.exceptions import RouteNotFoundException
from waypoint.routing.routes import CompiledRoute, HTTPMethod, Route, RouteMatch

logger = logging.getLogger(__name__)


def compile_routes(routes: Iterable[Route]) -> tuple[CompiledRoute, ...]:
    """Compile every route into the snapshot used for matching."""
    return tuple(route.compile() for route in routes)


def find_matching_route(
    request_method: str,
    request_path: str,
    compiled_routes: Sequence[CompiledRoute],
) -> RouteMatch | None:
    """Find the first compiled route matching the method and path.

    Args:
        request_method: HTTP method of the request, compared case-insensitively
        request_path: Path of the request, without the query string
        compiled_routes: Compiled routes in registration order

    Returns:
        The match with its positional parameters, or None.

    Examples:
        >>> routes = compile_routes([Route(HTTPMethod.GET, "/user/{id}", handler)])
        >>> find_matching_route("GET", "/user/7", routes).params
        ("7",)
    """
    method = request_method.upper()
    for compiled in compiled_routes:
        if compiled.route.method != method:
            continue

        params = compiled.pattern.match(request_path)
        if params is not None:
            return RouteMatch(compiled.route, params)

    return None


def resolve_http_route(
    request_method: str,
    request_path: str,
    compiled_routes: Sequence[CompiledRoute],
) -> RouteMatch:
    """Resolve a request to a route match.

    Raises:
        RouteNotFoundException: If no route matches the method and path.
    """
    match = find_matching_route(request_method, request_path, compiled_routes)
    if match is None:
        logger.info(f"No route matches {request_method.upper()} {request_path}")
        raise RouteNotFoundException(method=request_method.upper(), path=request_path)

    logger.debug(f"{request_method.upper()} {request_path} matched {match.route.describe()}")
    return match


def allowed_methods(request_path: str, compiled_routes: Sequence[CompiledRoute]) -> list[HTTPMethod]:
    """List the methods of routes whose pattern matches the path, in registration order."""
    methods = []
    for compiled in compiled_routes:
        if compiled.route.method not in methods and compiled.pattern.match(request_path) is not None:
            methods.append(compiled.route.method)

    return methods
