import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from types import MappingProxyType
from typing import Any

from bevy import get_registry
from bevy.containers import Container

from waypoint.config import DEFAULT_CONFIG_FILE, RouterConfig, load_config
from waypoint.exception_handlers import render_error_page, render_exception
from waypoint.exceptions import HandlerUnresolvableException, RouteNotFoundException
from waypoint.protocols import ErrorRendererProtocol, RouterProtocol
from waypoint.routing.controllers import ControllerRegistry
from waypoint.routing.generation import url_for_named_route
from waypoint.routing.groups import GroupContext, GroupStack
from waypoint.routing.handler_utils import invoke_route
from waypoint.routing.resolvers import compile_routes, resolve_http_route
from waypoint.routing.routes import CompiledRoute, HTTPMethod, Middleware, Route, RouteMatch, to_handler

logger = logging.getLogger(__name__)


class Router(RouterProtocol):
    """HTTP request router mapping methods and paths to handlers.

    Routes are matched in registration order and the first match wins. Handlers
    are either callables, which receive the captured path parameters
    positionally, or controller references like "UserController::show", which
    are resolved through the router's ControllerRegistry.

    Examples:
        Basic router setup:

        ```python
        from waypoint import Router

        router = Router("https://example.com")

        router.get("/", lambda: "home")
        router.get("/user/{id}", lambda user_id: f"user {user_id}", name="profile")
        router.post("/user", "UserController::create")

        router.run("GET", "/user/42")        # "user 42"
        router.route("profile", {"id": 42})  # "https://example.com/user/42"
        ```

        Groups and middleware:

        ```python
        def audit(call_next, *params):
            log.info("admin access")
            return call_next()

        with router.group({"name": "admin", "prefix": "/admin", "middlewares": [audit]}):
            router.get("/users", list_users)      # GET /admin/users, audited

        router.middleware(require_login)          # applies to the next route only
        router.get("/account", show_account)
        ```

    Compiled patterns are built on the first dispatch (or by `build()`). Routes
    registered afterwards are kept for URL generation but never matched, so
    the intended lifecycle is: register everything, dispatch, discard.

    Args:
        domain: Base URL prepended by `route()`. A trailing slash is removed.
        separator: Separator between class and method in controller references.
        config: A complete RouterConfig; takes precedence over domain/separator.
        controllers: Registry used to resolve controller references.
        error_renderer: Called as renderer(status_code, message) when `run()`
            cannot dispatch. Defaults to an HTML ErrorPage.
        container: Bevy container to branch from for each dispatch.
    """

    def __init__(
        self,
        domain: str = "",
        separator: str = "::",
        *,
        config: RouterConfig | None = None,
        controllers: ControllerRegistry | None = None,
        error_renderer: ErrorRendererProtocol | None = None,
        container: Container | None = None,
    ):
        self.config = config or RouterConfig(domain=domain, separator=separator)
        self.controllers = controllers if controllers is not None else ControllerRegistry()
        self.error_renderer = error_renderer or render_error_page

        self._routes: list[Route] = []
        self._named_routes: dict[str, Route] = {}
        self._groups = GroupStack()
        # Middleware staged for the next registered route only
        self._staged_middlewares: list[Middleware] = []
        self._namespace = self.config.namespace
        # Snapshot of compiled routes, built once on first dispatch
        self._compiled: tuple[CompiledRoute, ...] | None = None

        self._root_container = container or get_registry().create_container()
        self._active_container: Container | None = None

    @classmethod
    def from_config(
        cls,
        config_path: str | Path = DEFAULT_CONFIG_FILE,
        **kwargs: Any,
    ) -> "Router":
        """Create a router from a YAML config file.

        The `router` section provides the RouterConfig and the `controllers`
        section maps controller names to "module.path:Symbol" import strings.

        ```yaml
        router:
          domain: https://example.com
          separator: "::"
          namespace: app
        controllers:
          app.UserController: myapp.controllers:UserController
        ```
        """
        config = load_config(config_path)
        controllers = kwargs.pop("controllers", None) or ControllerRegistry()
        for name, import_str in config.get("controllers", {}).items():
            controllers.register(name, import_str)

        return cls(
            config=RouterConfig.from_dict(config.get("router", {})),
            controllers=controllers,
            **kwargs,
        )

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def named_routes(self) -> Mapping[str, Route]:
        return MappingProxyType(self._named_routes)

    @property
    def current_namespace(self) -> str:
        return self._namespace

    @property
    def is_built(self) -> bool:
        return self._compiled is not None

    @property
    def container(self) -> Container:
        """The container of the dispatch in progress, or the root container between dispatches."""
        return self._active_container or self._root_container

    def get(self, path: str, handler: Callable[..., Any] | str, *, name: str | None = None) -> Route:
        return self.add_route(HTTPMethod.GET, path, handler, name=name)

    def post(self, path: str, handler: Callable[..., Any] | str, *, name: str | None = None) -> Route:
        return self.add_route(HTTPMethod.POST, path, handler, name=name)

    def put(self, path: str, handler: Callable[..., Any] | str, *, name: str | None = None) -> Route:
        return self.add_route(HTTPMethod.PUT, path, handler, name=name)

    def patch(self, path: str, handler: Callable[..., Any] | str, *, name: str | None = None) -> Route:
        return self.add_route(HTTPMethod.PATCH, path, handler, name=name)

    def delete(self, path: str, handler: Callable[..., Any] | str, *, name: str | None = None) -> Route:
        return self.add_route(HTTPMethod.DELETE, path, handler, name=name)

    def add_route(
        self,
        method: str | HTTPMethod,
        path: str,
        handler: Callable[..., Any] | str,
        *,
        name: str | None = None,
    ) -> Route:
        """Adds a route to this router.

        The route takes the middleware staged with `middleware()` (clearing the
        staging list), the innermost group's name, prefix and middleware, and
        the namespace current at this moment.

        Args:
            method: One of GET, POST, PUT, PATCH or DELETE (case-insensitive).
            path: The path template, e.g. "/user/{id}".
            handler: A callable or a "Class<separator>method" reference.
            name: Optional name for URL generation with `route()`.

        Returns:
            The registered Route.

        Raises:
            ValueError: If the method is not supported.
            TypeError: If the handler is neither callable nor a string.

        Examples:
            >>> router.add_route("GET", "/users/{id}", show_user, name="user")
            >>> router.add_route("delete", "/users/{id}", "UserController::destroy")
        """
        group = self._groups.current
        route = Route(
            method=HTTPMethod.parse(method),
            path=group.apply_prefix(path) if group else path,
            handler=to_handler(handler, self.config.separator),
            middlewares=tuple(self._staged_middlewares),
            group_middlewares=group.middlewares if group else (),
            group_name=group.name if group else None,
            name=name,
            namespace=self._namespace,
        )
        self._staged_middlewares = []
        self._routes.append(route)

        if name is not None:
            if name in self._named_routes:
                logger.debug(f"Route name {name!r} reassigned to {route.describe()}")
            self._named_routes[name] = route

        if self._compiled is not None:
            logger.warning(
                f"Route {route.describe()} was registered after the routes were compiled; "
                "it can be used for URL generation but will never be matched"
            )

        return route

    def middleware(self, middleware: Middleware) -> None:
        """Stage a middleware for the next registered route.

        Middleware is called as middleware(call_next, *params) and may be a
        callable or a controller reference string.
        """
        self._staged_middlewares.append(middleware)

    def namespace(self, namespace: str) -> None:
        """Set the controller namespace for routes registered from now on.

        The namespace is bound to each route when it is registered, so changing
        it later does not affect existing routes.
        """
        self._namespace = namespace.strip(".")

    def group(
        self,
        attributes: Mapping[str, Any],
        body: Callable[[], Any] | None = None,
    ):
        """Open a route group.

        With a `body` the group is active while the body runs. Without one a
        context manager is returned:

        ```python
        router.group({"name": "api", "prefix": "/api"}, lambda: router.get("/ping", ping))

        with router.group({"name": "api", "prefix": "/api"}):
            router.get("/ping", ping)
        ```

        Nested groups are allowed but not merged: routes take the prefix and
        middleware of the innermost group only.
        """
        scope = self._group_scope(GroupContext.from_attributes(attributes))
        if body is None:
            return scope

        with scope:
            body()

    @contextmanager
    def _group_scope(self, group: GroupContext) -> Iterator[GroupContext]:
        self._groups.push(group)
        try:
            yield group
        finally:
            self._groups.pop()

    def build(self) -> "Router":
        """Compile the route patterns now instead of on the first dispatch."""
        if self._compiled is None:
            self._compiled = compile_routes(self._routes)
            logger.debug(f"Compiled {len(self._compiled)} routes")

        return self

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find the route a request would be dispatched to, without invoking it."""
        try:
            return resolve_http_route(method, path, self.build()._compiled)
        except RouteNotFoundException:
            return None

    def dispatch(self, method: str, path: str) -> Any:
        """Match a request and invoke its handler through the middleware chain.

        Returns:
            Whatever the handler (or a short-circuiting middleware) returns.

        Raises:
            RouteNotFoundException: If no route matches.
            HandlerUnresolvableException: If a controller reference cannot be resolved.
        """
        match = resolve_http_route(method, path, self.build()._compiled)
        with self._root_container.branch() as container:
            container.add(Router, self)
            container.add(RouteMatch, match)
            outer, self._active_container = self._active_container, container
            try:
                return invoke_route(match, self.controllers, self.config.separator)
            finally:
                self._active_container = outer

    def run(self, method: str, path: str) -> Any:
        """Dispatch a request, handing routing failures to the error renderer.

        Returns:
            The handler's result, or the error renderer's result when no route
            matches (404, "Page not found") or the handler cannot be resolved
            (500, "Internal Server Error").
        """
        try:
            return self.dispatch(method, path)
        except (RouteNotFoundException, HandlerUnresolvableException) as e:
            return render_exception(e, self.error_renderer)

    def route(self, name: str, parameters: Mapping[str, Any] | None = None) -> str | None:
        """Build the URL of a named route.

        Each "{key}" in the route's template is replaced by the matching
        parameter; placeholders without a value are left as they are.

        Returns:
            The configured domain followed by the path, or None when no route
            has that name.

        Examples:
            >>> router.get("/user/{id}", show_user, name="profile")
            >>> router.route("profile", {"id": 42})
            "https://example.com/user/42"
            >>> router.route("missing") is None
            True
        """
        return url_for_named_route(self._named_routes, self.config.domain, name, parameters)

    def __repr__(self) -> str:
        return (
            f"<Router domain={self.config.domain!r} separator={self.config.separator!r} "
            f"namespace={self._namespace!r} routes={len(self._routes)}>"
        )

