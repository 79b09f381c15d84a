"""Batch service actions with one result per formula."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from brewsvc.daemon.context import UserRecord
from brewsvc.daemon.driver import SystemdDriver
from brewsvc.daemon.errors import ExecutionFailure, InvalidServiceDefinition
from brewsvc.formula import Formula
from brewsvc.services.definition import ServiceDefinition
from brewsvc.services.service import Service

BIN = "brewsvc"


class Outcome(str, Enum):
    SKIPPED = "skipped"
    DONE = "done"
    REFUSED = "refused"
    FAILED = "failed"


_SEVERITY = {Outcome.SKIPPED: 0, Outcome.DONE: 1, Outcome.REFUSED: 2, Outcome.FAILED: 3}


@dataclass
class ActionResult:
    """What happened to one service during a batch action."""

    name: str
    action: str
    outcome: Outcome | None = None
    entries: list[tuple[Outcome, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.entries]

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.SKIPPED, Outcome.DONE)

    def record(self, outcome: Outcome, message: str) -> None:
        # A later step never downgrades an earlier refusal or failure.
        if self.outcome is None or _SEVERITY[outcome] > _SEVERITY[self.outcome]:
            self.outcome = outcome
        self.entries.append((outcome, message))


@dataclass
class Selection:
    services: list[Service]
    missing: list[str] = field(default_factory=list)
    non_service: list[str] = field(default_factory=list)


def already_running(service: Service) -> str:
    return f"Service '{service.name}' is already running, use `{BIN} restart {service.name}` to restart."


def not_running(service: Service) -> str:
    return f"Service '{service.name}' is not running."


def begin_action(action: str, service: Service) -> str:
    return f"{action.capitalize()} `{service.name}`... (might take a while)"


def successful_action(action: str, service: Service) -> str:
    return f"Successfully {action} `{service.name}`."


def cannot_manage(service: Service) -> str:
    return f"Cannot manage '{service.name}', the service was started by '{service.user_name}'."


class ServiceController:
    """
    Applies user-facing actions to formula services.

    Each service is handled on its own: a failing ``systemctl`` call is
    recorded on that service's result and the batch moves on.
    """

    ACTIONS = ("run", "start", "stop", "restart", "cleanup", "purge")

    def __init__(
        self,
        driver: SystemdDriver,
        formulae: Iterable[Formula],
        current_user: UserRecord,
        progress: Callable[[str], None] | None = None,
    ):
        self.driver = driver
        self.current_user = current_user
        self.progress = progress or (lambda message: logger.info(message))
        formulae = sorted(formulae, key=lambda formula: formula.name)
        self.formulae = {formula.name: formula for formula in formulae}
        self.definitions = {
            formula.name: ServiceDefinition(formula) for formula in formulae if formula.plist is not None
        }

    @property
    def service_names(self) -> list[str]:
        return list(self.definitions)

    def select(self, names: Iterable[str]) -> Selection:
        selection = Selection(services=[])
        for name in names:
            if name in self.definitions:
                selection.services.append(self.driver.status(self.definitions[name]))
            elif name in self.formulae:
                selection.non_service.append(name)
            else:
                selection.missing.append(name)
        return selection

    def list(self, names: Iterable[str] | None = None) -> list[Service]:
        return self.select(self.service_names if names is None else names).services

    def execute(self, action: str, services: Iterable[Service]) -> list[ActionResult]:
        if action not in self.ACTIONS:
            raise ValueError(f"Unknown action: {action}")
        handler = getattr(self, f"_{action}")
        results = []
        for service in services:
            result = ActionResult(name=service.name, action=action)
            try:
                handler(service, result)
            except (ExecutionFailure, InvalidServiceDefinition, OSError) as e:
                logger.debug(f"{action} {service.name} failed: {e!r}")
                result.error = str(e)
                result.record(Outcome.FAILED, f"Failed to {action} `{service.name}`: {e}")
            if result.outcome is None:
                result.outcome = Outcome.SKIPPED
            results.append(result)
        return results

    def owns(self, service: Service) -> bool:
        return service.user_name == self.current_user.name

    def can_manage(self, service: Service) -> bool:
        return not service.running or self.owns(service)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _run(self, service: Service, result: ActionResult) -> None:
        if service.running:
            return result.record(Outcome.SKIPPED, already_running(service))
        self.progress(begin_action("running", service))
        result.warnings += self.driver.run(service.definition)
        result.record(Outcome.DONE, successful_action("started", service))

    def _start(self, service: Service, result: ActionResult) -> None:
        if service.running:
            return result.record(Outcome.SKIPPED, already_running(service))
        result.warnings += self.driver.register(service.definition)
        self.progress(begin_action("starting", service))
        self.driver.start(service.definition)
        result.record(Outcome.DONE, successful_action("started", service))

    def _stop(self, service: Service, result: ActionResult) -> None:
        if not service.running:
            return result.record(Outcome.SKIPPED, not_running(service))
        if not self.can_manage(service):
            return result.record(Outcome.REFUSED, cannot_manage(service))
        result.warnings += self.driver.unregister(service.definition)
        self.progress(begin_action("stopping", service))
        self.driver.stop(service.definition)
        result.record(Outcome.DONE, successful_action("stopped", service))

    def _restart(self, service: Service, result: ActionResult) -> None:
        if not self.can_manage(service):
            return result.record(Outcome.REFUSED, cannot_manage(service))
        result.warnings += self.driver.register(service.definition)
        self.progress(begin_action("restarting", service))
        result.warnings += self.driver.restart(service.definition)
        result.record(Outcome.DONE, successful_action("restarted", service))

    def _cleanup(self, service: Service, result: ActionResult) -> None:
        definition = service.definition
        # Unit files of ours that nothing of ours is running.
        if self.driver.installed(definition) and (not service.running or not self.owns(service)):
            result.warnings += self.driver.unregister(definition)
            self.driver.uninstall(definition)
            result.record(
                Outcome.DONE,
                f"Successfully removed service file for '{service.name}' for user '{self.current_user.name}'.",
            )

        # Running services whose unit file is gone.
        if service.running and service.file is None:
            if not self.can_manage(service):
                return result.record(Outcome.REFUSED, cannot_manage(service))
            self.progress(begin_action("stopping", service))
            self.driver.stop(definition)
            result.record(Outcome.DONE, successful_action("stopped", service))

    def _purge(self, service: Service, result: ActionResult) -> None:
        self._stop(service, result)
        self._cleanup(self.driver.status(service.definition), result)
