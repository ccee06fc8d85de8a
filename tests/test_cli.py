import json
from pathlib import Path

import pytest
import yaml

from waypoint.cli import main
from waypoint.cli.commands import load_router
from waypoint.exceptions import WaypointConfigError
from waypoint.routing import Router


def test_load_router_from_instance():
    assert isinstance(load_router("tests.helpers:shared_router"), Router)


def test_load_router_from_factory():
    router = load_router("tests.helpers:build_router")

    assert len(router.routes) == 4


def test_load_router_rejects_other_objects():
    with pytest.raises(WaypointConfigError, match="expected a Router"):
        load_router("tests.helpers:not_a_router")


def test_routes_command(capsys):
    assert main(["routes", "tests.helpers:build_router"]) == 0

    out = capsys.readouterr().out
    assert "GET     /user/{id}" in out
    assert "UserController::show" in out
    assert "name=profile" in out
    assert "/admin/user/{id}" in out
    assert "group=admin" in out


def test_routes_command_json(capsys):
    assert main(["routes", "tests.helpers:build_router", "--format", "json"]) == 0

    rows = json.loads(capsys.readouterr().out)
    assert [row["method"] for row in rows] == ["GET", "GET", "POST", "DELETE"]
    assert rows[1] == {
        "method": "GET",
        "path": "/user/{id}",
        "handler": "UserController::show",
        "name": "profile",
        "group": None,
        "middlewares": 0,
    }


def test_match_command(capsys):
    assert main(["match", "tests.helpers:build_router", "GET", "/user/42"]) == 0

    out = capsys.readouterr().out
    assert "GET /user/{id} -> UserController::show" in out
    assert "[0] = '42'" in out


def test_match_command_reports_other_methods(capsys):
    assert main(["match", "tests.helpers:build_router", "PUT", "/user"]) == 1

    out = capsys.readouterr().out
    assert "No route matches PUT /user" in out
    assert "The path is registered for: POST" in out


def test_url_command(capsys):
    assert main(["url", "tests.helpers:build_router", "profile", "id=7"]) == 0

    assert capsys.readouterr().out.strip() == "https://example.com/user/7"


def test_url_command_unknown_name(capsys):
    assert main(["url", "tests.helpers:build_router", "nope"]) == 1

    assert "No route named 'nope'" in capsys.readouterr().out


def test_url_command_rejects_bad_parameter():
    assert main(["url", "tests.helpers:build_router", "profile", "id"]) == 1


def test_bad_import_fails():
    assert main(["routes", "tests.helpers:missing"]) == 1


def test_config_command(tmp_path: Path, capsys):
    path = tmp_path / "waypoint.config.yaml"
    path.write_text("router:\n  domain: https://example.com/\n")

    assert main(["config", "--config", str(path)]) == 0

    shown = yaml.safe_load(capsys.readouterr().out)
    assert shown == {
        "router": {"domain": "https://example.com", "separator": "::", "namespace": ""},
        "controllers": {},
    }


def test_no_command_prints_help(capsys):
    assert main([]) == 1

    assert "usage: waypoint" in capsys.readouterr().out
