import pytest

from waypoint.routing import ControllerRegistry, Router
from tests.helpers import UserController


class RecordingRenderer:
    """Error renderer remembering every (status_code, message) it was given."""

    def __init__(self):
        self.calls: list[tuple[int, str]] = []

    def __call__(self, status_code: int, message: str):
        self.calls.append((status_code, message))
        return f"error {status_code}"


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def controllers() -> ControllerRegistry:
    registry = ControllerRegistry()
    registry.register("UserController", UserController)
    registry.register("app.UserController", UserController)
    return registry


@pytest.fixture
def router(renderer: RecordingRenderer, controllers: ControllerRegistry) -> Router:
    return Router("https://example.com/", controllers=controllers, error_renderer=renderer)
