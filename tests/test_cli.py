from __future__ import annotations

import json

import pytest
from loguru import logger
from typer.testing import CliRunner

from brewsvc.cli import commands
from brewsvc.daemon.errors import DriverUnavailable
from brewsvc.services.controller import ActionResult, Outcome, ServiceController
from tests.conftest import FakeFormula, FakeRunner, make_definition

cli = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.disable("brewsvc")


def install_controller(monkeypatch, driver, users, names=("redis",)) -> ServiceController:
    formulae = [make_definition(name).formula for name in names] + [FakeFormula(name="jq")]
    controller = ServiceController(driver, formulae, users[1000], progress=lambda message: None)
    monkeypatch.setattr(commands, "_get_controller", lambda: controller)
    return controller


def test_list_shows_state_and_user(monkeypatch, driver, runner: FakeRunner, users) -> None:
    runner.outputs["status"] = "user-1000.slice\nhomebrew.mxcl.redis.service\n"
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["list"])

    assert result.exit_code == 0
    assert "redis" in result.output
    assert "started" in result.output
    assert "alice" in result.output


def test_ls_alias(monkeypatch, driver, users) -> None:
    install_controller(monkeypatch, driver, users)
    result = cli.invoke(commands.app, ["ls"])
    assert result.exit_code == 0
    assert "stopped" in result.output


def test_action_requires_names(monkeypatch, driver, users) -> None:
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["start"])

    assert result.exit_code == 1
    assert "Please provide formula(e) name(s) or use --all." in result.output


def test_start_reports_success_and_skips(monkeypatch, driver, runner: FakeRunner, users) -> None:
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["start", "redis", "jq", "nope"])

    assert result.exit_code == 0
    assert "Skipped non-service formulae: jq." in result.output
    assert "Skipped missing formulae: nope." in result.output
    assert "Successfully started `redis`." in result.output
    assert runner.commands[-1] == "systemctl --user start homebrew.mxcl.redis"


def test_failed_action_exits_nonzero(monkeypatch, driver, runner: FakeRunner, users) -> None:
    runner.failures["start homebrew.mxcl.redis"] = 1
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["start", "--all"])

    assert result.exit_code == 1
    assert "Failed to start `redis`" in result.output


def test_no_services_available(monkeypatch, driver, users) -> None:
    install_controller(monkeypatch, driver, users, names=())

    result = cli.invoke(commands.app, ["stop", "--all"])

    assert result.exit_code == 0
    assert "No services available to control with `brewsvc`." in result.output


def test_missing_driver_is_reported(monkeypatch) -> None:
    def unavailable():
        raise DriverUnavailable("No suitable driver was found.")

    monkeypatch.setattr(commands, "_get_controller", unavailable)

    result = cli.invoke(commands.app, ["list"])

    assert result.exit_code == 1
    assert "No suitable driver was found." in result.output


def test_list_json_prints_service_dicts(monkeypatch, driver, runner: FakeRunner, users) -> None:
    runner.outputs["status"] = "user-1000.slice\nhomebrew.mxcl.redis.service\n"
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["list", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == [{"name": "redis", "status": "started", "user": "alice", "file": None}]


def test_list_json_without_services_is_empty_array(monkeypatch, driver, users) -> None:
    install_controller(monkeypatch, driver, users, names=())

    result = cli.invoke(commands.app, ["list", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == []


def test_unknown_service_owner_is_reported(monkeypatch, driver, runner: FakeRunner, users) -> None:
    runner.outputs["status"] = "user-4242.slice\nhomebrew.mxcl.redis.service\n"
    install_controller(monkeypatch, driver, users)

    result = cli.invoke(commands.app, ["stop", "redis"])

    assert result.exit_code == 1
    assert "Error: No user with uid 4242 exists on this system" in result.output


def test_results_are_styled_by_outcome(monkeypatch, driver, users) -> None:
    controller = install_controller(monkeypatch, driver, users)
    canned = ActionResult(name="redis", action="start")
    canned.record(Outcome.SKIPPED, "redis was left alone.")
    canned.record(Outcome.DONE, "redis came up.")
    canned.record(Outcome.FAILED, "redis fell over.")
    monkeypatch.setattr(controller, "execute", lambda action, services: [canned])

    result = cli.invoke(commands.app, ["start", "redis"])

    assert result.exit_code == 1
    lines = result.output.splitlines()
    assert "redis was left alone." in lines
    assert "✓ redis came up." in lines
    assert "Error: redis fell over." in lines
