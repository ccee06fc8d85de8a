"""Default error rendering for failed dispatches."""

import html
import logging
from dataclasses import dataclass

from waypoint.exceptions import WaypointException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorPage:
    status_code: int
    message: str

    @property
    def body(self) -> str:
        message = html.escape(self.message)
        return f"<h1>Error {self.status_code}</h1><p>{message}</p>"


def render_error_page(status_code: int, message: str) -> ErrorPage:
    """Default error renderer: an HTML error page carrying the status code."""
    return ErrorPage(status_code, message)


def render_exception(exc: WaypointException, renderer=render_error_page):
    """Hand a routing exception to an error renderer as (status_code, message)."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__}: {exc.message}")

    return renderer(exc.status_code, exc.message)
