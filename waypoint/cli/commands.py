"""
CLI command handlers.

Each handler receives the parsed argument namespace and returns True on
success, False otherwise.
"""

import json
import logging
from dataclasses import asdict

import yaml

from waypoint.config import RouterConfig, import_from_string, load_config
from waypoint.exceptions import WaypointConfigError
from waypoint.routing.resolvers import allowed_methods, compile_routes
from waypoint.routing.router import Router

logger = logging.getLogger("waypoint")


def load_router(import_str: str) -> Router:
    """Import a Router, or call a zero-argument factory returning one.

    Raises:
        WaypointConfigError: If the import fails or does not yield a Router.
    """
    target = import_from_string(import_str)
    if not isinstance(target, Router) and callable(target):
        target = target()

    if not isinstance(target, Router):
        raise WaypointConfigError(
            f"'{import_str}' is a {type(target).__name__}, expected a Router or a function returning one"
        )

    return target


def _load_router_or_report(args_ns) -> Router | None:
    try:
        return load_router(args_ns.router)
    except WaypointConfigError as e:
        logger.error(str(e))
        return None


def handle_routes_command(args_ns):
    """Handles the 'routes' command."""
    logger.debug("Routes command started.")
    router = _load_router_or_report(args_ns)
    if router is None:
        return False

    rows = [
        {
            "method": str(route.method),
            "path": route.path,
            "handler": route.handler.describe(),
            "name": route.name,
            "group": route.group_name,
            "middlewares": len(route.middleware_chain),
        }
        for route in router.routes
    ]

    if args_ns.format == "json":
        print(json.dumps(rows, indent=2))
        return True

    if not rows:
        print("No routes registered.")
        return True

    for row in rows:
        extras = []
        if row["name"]:
            extras.append(f"name={row['name']}")
        if row["group"]:
            extras.append(f"group={row['group']}")
        if row["middlewares"]:
            extras.append(f"middlewares={row['middlewares']}")

        line = f"{row['method']:<7} {row['path']:<40} {row['handler']}"
        if extras:
            line += f"  ({', '.join(extras)})"
        print(line)

    return True


def handle_match_command(args_ns):
    """Handles the 'match' command."""
    logger.debug(f"Match command started for {args_ns.method} {args_ns.path}.")
    router = _load_router_or_report(args_ns)
    if router is None:
        return False

    match = router.match(args_ns.method, args_ns.path)
    if match is None:
        print(f"No route matches {args_ns.method.upper()} {args_ns.path}")
        methods = allowed_methods(args_ns.path, compile_routes(router.routes))
        if methods:
            print(f"   The path is registered for: {', '.join(methods)}")
        return False

    print(match.route.describe())
    for index, value in enumerate(match.params):
        print(f"   [{index}] = {value!r}")
    return True


def handle_url_command(args_ns):
    """Handles the 'url' command."""
    router = _load_router_or_report(args_ns)
    if router is None:
        return False

    parameters = {}
    for item in args_ns.parameters:
        key, sep, value = item.partition("=")
        if not sep or not key:
            logger.error(f"Invalid parameter '{item}'. Expected key=value.")
            return False
        parameters[key] = value

    url = router.route(args_ns.name, parameters)
    if url is None:
        print(f"No route named '{args_ns.name}'")
        return False

    print(url)
    return True


def handle_config_command(args_ns):
    """Handles the 'config' command."""
    logger.debug(f"Config command started for {args_ns.config}.")
    try:
        config = load_config(args_ns.config)
        router_config = RouterConfig.from_dict(config.get("router", {}))
    except WaypointConfigError as e:
        logger.error(str(e))
        return False

    print(
        yaml.dump(
            {"router": asdict(router_config), "controllers": config.get("controllers", {})},
            sort_keys=False,
            indent=2,
            default_flow_style=False,
        )
    )
    return True
