"""ASGI adapter serving a Waypoint router through Starlette.

A fresh router is built for every request, so registration state and the
compiled-pattern cache are never shared between concurrent requests.

```python
def build_router() -> Router:
    router = Router("https://example.com")
    router.get("/", lambda: PlainTextResponse("home"))
    return router

app = RouterApp(build_router)   # uvicorn module:app
```
"""

import logging
from collections.abc import Callable
from typing import Any

import starlette.responses
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.routing import Route

from waypoint.exception_handlers import ErrorPage
from waypoint.routing.router import Router
from waypoint.routing.routes import HTTPMethod

logger = logging.getLogger(__name__)

type RouterFactory = Callable[[], Router]


def to_response(result: Any) -> starlette.responses.Response:
    """Convert a dispatch result into a Starlette response."""
    match result:
        case starlette.responses.Response():
            return result

        case ErrorPage(status_code=status_code):
            return starlette.responses.HTMLResponse(result.body, status_code=status_code)

        case None:
            return starlette.responses.Response(status_code=204)

        case _:
            return starlette.responses.PlainTextResponse(str(result))


class RouterApp:
    """ASGI application dispatching every request through a per-request Router.

    Args:
        router_factory: Zero-argument callable returning a fully registered Router.
        debug: Passed through to Starlette.
    """

    def __init__(self, router_factory: RouterFactory, *, debug: bool = False):
        self.router_factory = router_factory
        self.app = Starlette(
            debug=debug,
            routes=[
                Route(
                    "/{path:path}",
                    self._endpoint,
                    methods=[method.value for method in HTTPMethod],
                )
            ],
        )

    async def _endpoint(self, request: Request) -> starlette.responses.Response:
        router = self.router_factory()
        result = await run_in_threadpool(router.run, request.method, request.url.path)
        return to_response(result)

    async def __call__(self, scope, receive, send):
        await self.app(scope, receive, send)
