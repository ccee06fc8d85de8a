import pytest

from waypoint.exceptions import HandlerUnresolvableException
from waypoint.routing import ControllerRef, ControllerRegistry
from tests.helpers import UserController


def test_register_and_resolve():
    registry = ControllerRegistry()
    registry.register("UserController", UserController)

    method = registry.resolve(ControllerRef("UserController", "show"))

    assert method("5") == "user 5"
    assert isinstance(method.__self__, UserController)


def test_registry_from_mapping():
    registry = ControllerRegistry({"UserController": UserController})

    assert "UserController" in registry
    assert len(registry) == 1
    assert registry.names() == ["UserController"]


def test_controller_decorator_defaults_to_class_name():
    registry = ControllerRegistry()

    @registry.controller()
    class HealthController:
        def check(self):
            return "ok"

    assert registry.resolve(ControllerRef("HealthController", "check"))() == "ok"


def test_controller_decorator_with_explicit_name():
    registry = ControllerRegistry()

    @registry.controller("ops.HealthController")
    class HealthController:
        def check(self):
            return "ok"

    assert registry.resolve(ControllerRef("HealthController", "check"), namespace="ops")() == "ok"


def test_factory_functions_are_supported():
    registry = ControllerRegistry()
    registry.register("UserController", lambda: UserController())

    assert registry.resolve(ControllerRef("UserController", "create"))() == "created"


def test_import_string_is_imported_lazily():
    registry = ControllerRegistry({"UserController": "tests.helpers:UserController"})

    assert registry.get_factory("UserController") is UserController
    assert registry.resolve(ControllerRef("UserController", "show"))("1") == "user 1"


def test_failed_import_string_is_unresolvable():
    registry = ControllerRegistry({"UserController": "tests.helpers:NoSuchController"})

    with pytest.raises(HandlerUnresolvableException) as exc_info:
        registry.resolve(ControllerRef("UserController", "show"))

    assert exc_info.value.reference == "UserController::show"


def test_unknown_class_is_unresolvable():
    registry = ControllerRegistry()

    with pytest.raises(HandlerUnresolvableException):
        registry.resolve(ControllerRef("UserController", "show"))


def test_namespace_is_part_of_the_lookup():
    registry = ControllerRegistry({"UserController": UserController})

    with pytest.raises(HandlerUnresolvableException):
        registry.resolve(ControllerRef("UserController", "show"), namespace="app")


def test_missing_method_is_unresolvable():
    registry = ControllerRegistry({"UserController": UserController})

    with pytest.raises(HandlerUnresolvableException):
        registry.resolve(ControllerRef("UserController", "destroy"))


def test_non_callable_factory_is_rejected():
    registry = ControllerRegistry()

    with pytest.raises(TypeError):
        registry.register("Broken", 42)


def test_controller_ref_parse_and_qualify():
    ref = ControllerRef.parse("UserController@show", "@")

    assert ref == ControllerRef("UserController", "show", "@")
    assert ref.qualified_name() == "UserController"
    assert ref.qualified_name("app.http") == "app.http.UserController"
    assert ref.describe() == "UserController@show"
