"""URL generation utilities for Waypoint routing.

Named routes are turned back into URLs by substituting parameter values into
the stored path template. The compiled patterns are never consulted.
"""

from collections.abc import Mapping
from typing import Any

from waypoint.routing.routes import Route


def build_url_from_template(template: str, parameters: Mapping[str, Any] | None = None) -> str:
    """Substitute parameter values into a path template.

    Every literal occurrence of "{key}" is replaced with str(value). Placeholders
    without a supplied value are left in place, and unused parameters are
    ignored.

    Examples:
        >>> build_url_from_template("/user/{id}", {"id": 42})
        "/user/42"

        >>> build_url_from_template("/posts/{post_id}/comments/{comment_id}", {"post_id": 1})
        "/posts/1/comments/{comment_id}"
    """
    path = template
    for key, value in (parameters or {}).items():
        path = path.replace("{" + str(key) + "}", str(value))

    return path


def url_for_named_route(
    named_routes: Mapping[str, Route],
    domain: str,
    name: str,
    parameters: Mapping[str, Any] | None = None,
) -> str | None:
    """Build the absolute URL for a named route.

    Returns:
        The domain followed by the substituted path, or None if no route has
        that name.
    """
    route = named_routes.get(name)
    if route is None:
        return None

    return domain + build_url_from_template(route.path, parameters)
