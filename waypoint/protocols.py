"""
Protocol definitions for Waypoint.

These describe the collaborators the router talks to without depending on
their concrete implementations.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol


class ErrorRendererProtocol(Protocol):
    """Renders a dispatch failure. Called once; the dispatch ends afterwards."""

    def __call__(self, status_code: int, message: str) -> Any: ...


class RouterProtocol(Protocol):
    """Protocol for request routing capabilities."""

    @abstractmethod
    def add_route(self, method: str, path: str, handler: Any, *, name: str | None = None) -> Any:
        """Add a route to the router."""
        ...

    @abstractmethod
    def run(self, method: str, path: str) -> Any:
        """Dispatch a request, rendering routing failures."""
        ...

    @abstractmethod
    def route(self, name: str, parameters: Mapping[str, Any] | None = None) -> str | None:
        """Build the URL of a named route."""
        ...
