"""Route table entries and handler references.

A route binds one HTTP method and one path template to a handler. Handlers are
either inline callbacks or controller references naming a class and a method,
e.g. "UserController::show".
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from waypoint.routing.patterns import CompiledPattern, compile_path

type Middleware = Callable[..., Any] | str


class HTTPMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: "str | HTTPMethod") -> "HTTPMethod":
        """Normalize a method name, raising ValueError for unsupported verbs."""
        try:
            return cls(str(method).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


@dataclass(frozen=True)
class InlineHandler:
    """A handler that is called directly with the captured path parameters."""

    callback: Callable[..., Any]

    def describe(self) -> str:
        return getattr(self.callback, "__qualname__", repr(self.callback))


@dataclass(frozen=True)
class ControllerRef:
    """A handler naming a controller class and the method to invoke on it."""

    class_name: str
    method_name: str
    separator: str = "::"

    @classmethod
    def parse(cls, reference: str, separator: str = "::") -> "ControllerRef":
        """Split a "Class<separator>method" string.

        A reference without the separator keeps the whole string as the class
        name and an empty method name, which can never be resolved.
        """
        class_name, _, method_name = reference.partition(separator)
        return cls(class_name, method_name, separator)

    def qualified_name(self, namespace: str = "") -> str:
        if not namespace:
            return self.class_name

        return f"{namespace}.{self.class_name}"

    def describe(self) -> str:
        return f"{self.class_name}{self.separator}{self.method_name}"


type Handler = InlineHandler | ControllerRef


def to_handler(handler: "Handler | Callable[..., Any] | str", separator: str = "::") -> Handler:
    """Wrap a raw handler (callable or reference string) in its Handler variant."""
    match handler:
        case InlineHandler() | ControllerRef():
            return handler
        case str():
            return ControllerRef.parse(handler, separator)
        case _ if callable(handler):
            return InlineHandler(handler)
        case _:
            raise TypeError(
                f"Route handler must be a callable or a controller reference string, got {handler!r}"
            )


@dataclass(frozen=True)
class Route:
    """One registered (method, path template, handler) binding.

    Attributes:
        method: The HTTP method the route answers
        path: The path template, group prefix already applied
        handler: Inline callback or controller reference
        middlewares: Per-route middleware staged before registration
        group_middlewares: Middleware of the innermost group active at registration
        group_name: Name of the innermost group active at registration
        name: Optional route name used for URL generation
        namespace: Controller namespace in effect at registration
    """

    method: HTTPMethod
    path: str
    handler: Handler
    middlewares: tuple[Middleware, ...] = ()
    group_middlewares: tuple[Middleware, ...] = ()
    group_name: str | None = None
    name: str | None = None
    namespace: str = ""

    @property
    def middleware_chain(self) -> tuple[Middleware, ...]:
        """Group middleware first, then per-route middleware."""
        return self.group_middlewares + self.middlewares

    def compile(self) -> "CompiledRoute":
        return CompiledRoute(self, compile_path(self.path))

    def describe(self) -> str:
        return f"{self.method} {self.path} -> {self.handler.describe()}"


@dataclass(frozen=True)
class CompiledRoute:
    route: Route
    pattern: CompiledPattern


@dataclass(frozen=True)
class RouteMatch:
    """The outcome of a successful match: the route and its captured parameters."""

    route: Route
    params: tuple[str, ...] = field(default=())
