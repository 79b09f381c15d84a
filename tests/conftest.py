from __future__ import annotations

import plistlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from brewsvc.daemon.commandline import Systemctl
from brewsvc.daemon.context import InvocationContext, UserRecord
from brewsvc.daemon.converter import PlistToServiceFileConverter
from brewsvc.daemon.driver import SystemdDriver
from brewsvc.daemon.errors import ExecutionFailure
from brewsvc.daemon.experimental import ExperimentalRunInfoGenerator
from brewsvc.services.definition import ServiceDefinition


class FakeRunner:
    """Stands in for CommandRunner; records calls and replays canned output."""

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        failures: dict[str, int] | None = None,
        events: list | None = None,
        watch: Path | None = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.events = events if events is not None else []
        self.watch = watch

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def invoke(self, command_line: str, extra_env: dict[str, str] | None = None) -> str:
        self.calls.append((command_line, dict(extra_env or {})))
        self.events.append((command_line, self.watch.exists()) if self.watch else command_line)
        for needle, returncode in self.failures.items():
            if needle in command_line:
                raise ExecutionFailure(command_line, returncode)
        for needle, output in self.outputs.items():
            if needle in command_line:
                return output
        return ""


@dataclass
class FakeFormula:
    name: str
    plist: str | None = None
    prefix: str = "/home/linuxbrew/.linuxbrew/Cellar/redis/7.2.4"

    @property
    def plist_name(self) -> str:
        return f"homebrew.mxcl.{self.name}"


def make_plist(data: dict[str, Any]) -> str:
    return plistlib.dumps(data, sort_keys=False).decode("utf-8")


def make_definition(name: str = "redis", data: dict[str, Any] | None = None) -> ServiceDefinition:
    if data is None:
        data = {
            "Label": f"homebrew.mxcl.{name}",
            "ProgramArguments": [f"/opt/{name}/bin/{name}-server"],
            "RunAtLoad": True,
            "KeepAlive": True,
        }
    return ServiceDefinition(FakeFormula(name=name, plist=make_plist(data)))


@pytest.fixture
def users(tmp_path: Path) -> dict[int, UserRecord]:
    return {
        0: UserRecord(uid=0, name="root", home=tmp_path / "root"),
        1000: UserRecord(uid=1000, name="alice", home=tmp_path / "alice"),
        1001: UserRecord(uid=1001, name="bob", home=tmp_path / "bob"),
    }


@pytest.fixture
def context(users: dict[int, UserRecord]) -> InvocationContext:
    return InvocationContext(user=users[1000])


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def systemctl(runner: FakeRunner, context: InvocationContext) -> Systemctl:
    return Systemctl("systemctl", context, runner)


def build_driver(
    systemctl: Systemctl,
    users: dict[int, UserRecord],
    tmp_path: Path,
    generator=None,
) -> SystemdDriver:
    return SystemdDriver(
        PlistToServiceFileConverter(),
        generator or ExperimentalRunInfoGenerator(systemctl),
        systemctl,
        systemctl.context,
        system_unit_dir=tmp_path / "system",
        user_lookup=users.__getitem__,
    )


@pytest.fixture
def driver(systemctl: Systemctl, users: dict[int, UserRecord], tmp_path: Path) -> SystemdDriver:
    return build_driver(systemctl, users, tmp_path)
