"""Controller lookup for controller-reference handlers.

Controller references such as "UserController::show" are resolved through a
ControllerRegistry that maps (optionally namespaced) class names to factories.
Factories are called with no arguments to produce a controller instance.
Entries may also be given as "module.path:Symbol" import strings, which are
imported the first time the controller is needed.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from waypoint.config import import_from_string
from waypoint.exceptions import HandlerUnresolvableException, WaypointConfigError
from waypoint.routing.routes import ControllerRef

logger = logging.getLogger(__name__)

type ControllerFactory = Callable[[], Any]


class ControllerRegistry:
    """Maps controller names to zero-argument factories.

    Examples:
        ```python
        registry = ControllerRegistry()
        registry.register("app.UserController", UserController)
        registry.register("app.PostController", "myapp.posts:PostController")

        @registry.controller("app.HealthController")
        class HealthController:
            def check(self):
                return "ok"
        ```
    """

    def __init__(self, controllers: Mapping[str, "ControllerFactory | str"] | None = None):
        self._factories: dict[str, ControllerFactory | str] = {}
        for name, factory in (controllers or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: "ControllerFactory | str") -> None:
        if not isinstance(factory, str) and not callable(factory):
            raise TypeError(f"Controller factory for {name!r} must be callable or an import string")

        self._factories[name] = factory

    def controller(self, name: str | None = None) -> Callable[[type], type]:
        """Class decorator registering a controller under `name` (default: class name)."""

        def decorator(cls: type) -> type:
            self.register(name or cls.__name__, cls)
            return cls

        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def names(self) -> list[str]:
        return list(self._factories)

    def get_factory(self, name: str) -> ControllerFactory | None:
        """Return the factory for `name`, importing it if it was registered by string.

        Returns None when the name is unknown or its import string fails.
        """
        factory = self._factories.get(name)
        if isinstance(factory, str):
            try:
                factory = import_from_string(factory)
            except WaypointConfigError as e:
                logger.error(f"Could not import controller {name!r}: {e}")
                return None

            self._factories[name] = factory

        return factory

    def resolve(self, ref: ControllerRef, namespace: str = "") -> Callable[..., Any]:
        """Instantiate the referenced controller and return the bound method.

        Args:
            ref: The controller reference to resolve
            namespace: Namespace prefixed to the class name

        Returns:
            The bound method, ready to be called with the route parameters.

        Raises:
            HandlerUnresolvableException: If the class is unknown or the method is
                missing or not callable.
        """
        qualified = ref.qualified_name(namespace)
        factory = self.get_factory(qualified)
        if factory is None:
            logger.error(f"Controller class {qualified!r} is not registered")
            raise HandlerUnresolvableException(reference=ref.describe())

        instance = factory()
        method = getattr(instance, ref.method_name, None) if ref.method_name else None
        if not callable(method):
            logger.error(f"Controller {qualified!r} has no method {ref.method_name!r}")
            raise HandlerUnresolvableException(reference=ref.describe())

        return method
