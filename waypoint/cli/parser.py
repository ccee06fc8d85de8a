"""
CLI argument parser.

This module contains the argument parser setup for the Waypoint CLI.
"""

import argparse

from waypoint.config import DEFAULT_CONFIG_FILE

from .commands import (
    handle_config_command,
    handle_match_command,
    handle_routes_command,
    handle_url_command,
)

WAYPOINT_VERSION = "0.1.0"


def create_parser():
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="waypoint", description="Inspect Waypoint routers from the command line."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {WAYPOINT_VERSION}"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )

    # Parent parser for commands that load a router
    router_parent = argparse.ArgumentParser(add_help=False)
    router_parent.add_argument(
        "router",
        help='Router to load, as "module.path:attribute". The attribute may be a Router '
        "or a zero-argument function returning one.",
    )

    subparsers = parser.add_subparsers(
        title="commands", dest="command", required=False, help="Command to execute"
    )

    routes_parser = subparsers.add_parser(
        "routes", parents=[router_parent], help="List the registered routes in match order."
    )
    routes_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format. Default: text",
    )
    routes_parser.set_defaults(func=handle_routes_command)

    match_parser = subparsers.add_parser(
        "match", parents=[router_parent], help="Show which route a request would be dispatched to."
    )
    match_parser.add_argument("method", help="HTTP method, e.g. GET")
    match_parser.add_argument("path", help="Request path, e.g. /user/42")
    match_parser.set_defaults(func=handle_match_command)

    url_parser = subparsers.add_parser(
        "url", parents=[router_parent], help="Build the URL of a named route."
    )
    url_parser.add_argument("name", help="Route name")
    url_parser.add_argument(
        "parameters",
        nargs="*",
        metavar="key=value",
        help="Values substituted into the route's placeholders",
    )
    url_parser.set_defaults(func=handle_url_command)

    config_parser = subparsers.add_parser(
        "config", help="Show the router settings loaded from a config file."
    )
    config_parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_FILE,
        help=f"Path to config file. Default: ./{DEFAULT_CONFIG_FILE}",
    )
    config_parser.set_defaults(func=handle_config_command)

    return parser
