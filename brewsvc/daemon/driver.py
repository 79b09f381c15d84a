"""Lifecycle driver: unit files on disk plus ``systemctl`` verbs."""

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from brewsvc.daemon.base import RunInfoGenerator
from brewsvc.daemon.commandline import Systemctl
from brewsvc.daemon.context import InvocationContext, UserRecord
from brewsvc.daemon.converter import PlistToServiceFileConverter
from brewsvc.daemon.errors import UnknownUser

if TYPE_CHECKING:
    from brewsvc.services.definition import ServiceDefinition
    from brewsvc.services.service import Service

SYSTEM_UNIT_DIR = Path("/lib/systemd/system")
USER_UNIT_DIR = Path(".config/systemd/user")


class SystemdDriver:
    """Installs, registers and runs formula services under systemd.

    Every mutating verb that changes what is running resets the run-info
    generator, so the next :meth:`status` call re-reads ``systemctl``.
    Methods that install a unit file return the conversion warnings of
    that install (empty when the file already existed).
    """

    def __init__(
        self,
        converter: PlistToServiceFileConverter,
        generator: RunInfoGenerator,
        systemctl: Systemctl,
        context: InvocationContext,
        *,
        system_unit_dir: Path = SYSTEM_UNIT_DIR,
        user_unit_dir: Path = USER_UNIT_DIR,
        user_lookup: Callable[[int], UserRecord] = UserRecord.from_uid,
    ):
        self.converter = converter
        self.generator = generator
        self.systemctl = systemctl
        self.context = context
        self.system_unit_dir = Path(system_unit_dir)
        self.user_unit_dir = Path(user_unit_dir)
        self.user_lookup = user_lookup

    # ------------------------------------------------------------------
    # Start / Stop
    # ------------------------------------------------------------------

    def run(self, definition: "ServiceDefinition") -> list[str]:
        """systemd has no "run without registering"; same as :meth:`start`."""
        return self.start(definition)

    def start(self, definition: "ServiceDefinition") -> list[str]:
        warnings = self.install(definition)
        self._invoke("start", self.service_id(definition))
        self.generator.reset()
        return warnings

    def stop(self, definition: "ServiceDefinition") -> None:
        self._invoke("stop", self.service_id(definition))
        self.generator.reset()

    def restart(self, definition: "ServiceDefinition") -> list[str]:
        warnings = self.install(definition)
        self._invoke("restart", self.service_id(definition))
        self.generator.reset()
        return warnings

    # ------------------------------------------------------------------
    # Register / Unregister
    # ------------------------------------------------------------------

    def register(self, definition: "ServiceDefinition") -> list[str]:
        warnings = self.install(definition)
        self._invoke("enable", self.service_id(definition))
        return warnings

    def unregister(self, definition: "ServiceDefinition") -> list[str]:
        # disable needs a unit file; don't leave one behind if we made it.
        was_installed = self.installed(definition)
        try:
            warnings = self.install(definition)
            self._invoke("disable", self.service_id(definition))
        finally:
            if not was_installed and self.installed(definition):
                self.uninstall(definition)
        return warnings

    # ------------------------------------------------------------------
    # Install / Uninstall
    # ------------------------------------------------------------------

    def install(self, definition: "ServiceDefinition") -> list[str]:
        warnings: list[str] = []
        path = self.service_file_path(definition)
        if not path.exists():
            result = self.converter.convert(definition)
            if result.warning:
                warnings.append(result.warning)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(result.render())
            logger.info(f"Wrote {path}")
        self._invoke("daemon-reload")
        return warnings

    def installed(self, definition: "ServiceDefinition") -> bool:
        return self.service_file_path(definition).exists()

    def uninstall(self, definition: "ServiceDefinition") -> None:
        path = self.service_file_path(definition)
        if path.exists():
            path.unlink()
            logger.info(f"Removed {path}")
        self._invoke("daemon-reload")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def status(self, definition: "ServiceDefinition") -> "Service":
        from brewsvc.services.service import Service

        info = self.generator.run_info(self.service_id(definition))
        uid = self.context.uid if info.user is None else info.user
        user = self.context.user if uid == self.context.uid else self._lookup(uid)
        path = self.service_file_path(definition, user)
        return Service(
            definition=definition,
            state=info.state,
            user=user,
            file=path if path.exists() else None,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def service_id(definition: "ServiceDefinition") -> str:
        """``@`` would make systemd read the name as a template instance."""
        return definition.id.replace("@", "-at-")

    def service_file_path(self, definition: "ServiceDefinition", user: UserRecord | None = None) -> Path:
        user = user or self.context.user
        directory = self.system_unit_dir if user.is_root else user.home / self.user_unit_dir
        return directory / f"{self.service_id(definition)}.service"

    def _lookup(self, uid: int) -> UserRecord:
        try:
            return self.user_lookup(uid)
        except KeyError as e:
            raise UnknownUser(uid) from e

    def _invoke(self, *args: str) -> str:
        return self.systemctl.invoke(*args)
