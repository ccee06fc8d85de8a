"""Handler and middleware invocation for matched routes.

Middleware receives a zero-argument `call_next` followed by the route
parameters, and returns whatever it wants the dispatch to return:

```python
def require_login(call_next, *params):
    if not session.user:
        return "login required"
    return call_next()
```
"""

from collections.abc import Callable, Sequence
from typing import Any

from waypoint.routing.controllers import ControllerRegistry
from waypoint.routing.routes import ControllerRef, InlineHandler, RouteMatch, to_handler


def resolve_callable(
    handler: InlineHandler | ControllerRef,
    controllers: ControllerRegistry,
    namespace: str = "",
) -> Callable[..., Any]:
    """Turn a handler reference into something that can be called with the route parameters.

    Raises:
        HandlerUnresolvableException: If a controller reference cannot be resolved.
    """
    match handler:
        case InlineHandler(callback=callback):
            return callback
        case ControllerRef():
            return controllers.resolve(handler, namespace)


def build_chain(
    middlewares: Sequence[Callable[..., Any]],
    handler: Callable[..., Any],
    params: tuple[str, ...],
) -> Callable[[], Any]:
    """Build the middleware chain: the first middleware runs first, the handler runs last."""

    def call_handler() -> Any:
        return handler(*params)

    chain = call_handler
    for middleware in reversed(middlewares):
        chain = _wrap(middleware, chain, params)

    return chain


def _wrap(middleware: Callable[..., Any], call_next: Callable[[], Any], params: tuple[str, ...]) -> Callable[[], Any]:
    def wrapper() -> Any:
        return middleware(call_next, *params)

    return wrapper


def invoke_route(match: RouteMatch, controllers: ControllerRegistry, separator: str = "::") -> Any:
    """Resolve the matched route's middleware and handler, then run the chain.

    Every reference is resolved before anything runs, so an unresolvable
    handler never leaves middleware half-executed.
    """
    route = match.route
    middlewares = [
        resolve_callable(to_handler(middleware, separator), controllers, route.namespace)
        for middleware in route.middleware_chain
    ]
    handler = resolve_callable(route.handler, controllers, route.namespace)
    return build_chain(middlewares, handler, match.params)()
