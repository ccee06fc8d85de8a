"""Command-line interface for inspecting Waypoint routers."""

import logging
import os
import sys

from .parser import create_parser

# Logging setup
logger = logging.getLogger("waypoint")
if not logger.hasHandlers():
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    if os.getenv("WAYPOINT_DEBUG"):
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
        )
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args_ns = parser.parse_args(argv)

    if args_ns.debug or os.getenv("WAYPOINT_DEBUG"):
        os.environ["WAYPOINT_DEBUG"] = "1"
        logger.setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled.")

    if not hasattr(args_ns, "func"):
        parser.print_help()
        return 1

    return 0 if args_ns.func(args_ns) else 1


if __name__ == "__main__":
    sys.exit(main())
