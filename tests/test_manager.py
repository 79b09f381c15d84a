from __future__ import annotations

import os
from pathlib import Path

import pytest

from brewsvc.config.schema import Config
from brewsvc.daemon import manager
from brewsvc.daemon.errors import DriverUnavailable
from brewsvc.daemon.experimental import ExperimentalRunInfoGenerator
from brewsvc.daemon.manager import DriverFactory
from brewsvc.daemon.standard import StandardRunInfoGenerator
from brewsvc.utils.helpers import ensure_homebrew_owner


@pytest.fixture
def linux(monkeypatch) -> None:
    monkeypatch.setattr(manager.platform, "system", lambda: "Linux")


def test_factory_defaults_to_experimental(linux, context) -> None:
    driver = DriverFactory.create(Config(systemctl="/usr/bin/systemctl"), context)

    assert isinstance(driver.generator, ExperimentalRunInfoGenerator)
    assert driver.systemctl.executable == "/usr/bin/systemctl"
    assert driver.context is context


def test_factory_honours_strategy_and_directories(linux, context) -> None:
    config = Config(systemctl="systemctl", strategy="standard", system_unit_dir="/etc/systemd/system")
    driver = DriverFactory.create(config, context)

    assert isinstance(driver.generator, StandardRunInfoGenerator)
    assert driver.system_unit_dir == Path("/etc/systemd/system")


def test_factory_requires_linux(monkeypatch, context) -> None:
    monkeypatch.setattr(manager.platform, "system", lambda: "Darwin")
    with pytest.raises(DriverUnavailable):
        DriverFactory.create(Config(systemctl="systemctl"), context)


def test_factory_requires_systemctl(linux, monkeypatch, context) -> None:
    monkeypatch.setattr(manager.shutil, "which", lambda name: None)
    with pytest.raises(DriverUnavailable, match="systemctl is not on PATH"):
        DriverFactory.create(Config(), context)


def test_homebrew_owner_check(tmp_path: Path) -> None:
    ensure_homebrew_owner(tmp_path, os.getuid())
    with pytest.raises(PermissionError):
        ensure_homebrew_owner(tmp_path, os.getuid() + 1)
