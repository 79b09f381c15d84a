"""Pick and assemble the service driver for this host."""

import platform
import shutil
from pathlib import Path

from brewsvc.config.schema import Config
from brewsvc.daemon.base import RunInfoGenerator
from brewsvc.daemon.commandline import Systemctl
from brewsvc.daemon.context import InvocationContext
from brewsvc.daemon.converter import PlistToServiceFileConverter
from brewsvc.daemon.driver import SystemdDriver
from brewsvc.daemon.errors import DriverUnavailable
from brewsvc.daemon.experimental import ExperimentalRunInfoGenerator
from brewsvc.daemon.runner import CommandRunner
from brewsvc.daemon.standard import StandardRunInfoGenerator

_GENERATORS: dict[str, type[RunInfoGenerator]] = {
    "experimental": ExperimentalRunInfoGenerator,
    "standard": StandardRunInfoGenerator,
}


class DriverFactory:
    """Builds a :class:`SystemdDriver` from config, or explains why it can't."""

    @staticmethod
    def create(
        config: Config,
        context: InvocationContext | None = None,
        runner: CommandRunner | None = None,
    ) -> SystemdDriver:
        system = platform.system()
        if system != "Linux":
            raise DriverUnavailable(f"No suitable driver was found: {system} is not supported.")

        executable = config.systemctl or shutil.which("systemctl")
        if not executable:
            raise DriverUnavailable("No suitable driver was found: systemctl is not on PATH.")

        context = context or InvocationContext.current(config.runtime_dir)
        systemctl = Systemctl(str(executable), context, runner)
        generator = _GENERATORS[config.strategy](systemctl)
        return SystemdDriver(
            PlistToServiceFileConverter(),
            generator,
            systemctl,
            context,
            system_unit_dir=Path(config.system_unit_dir),
            user_unit_dir=Path(config.user_unit_dir),
        )
