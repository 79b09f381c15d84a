"""systemd driver for formula services."""

from brewsvc.daemon.base import RunInfo, RunInfoGenerator, RunState
from brewsvc.daemon.context import InvocationContext, UserRecord
from brewsvc.daemon.driver import SystemdDriver
from brewsvc.daemon.errors import (
    BrewsvcError,
    DriverUnavailable,
    ExecutionFailure,
    InternalInvariantViolation,
    InvalidServiceDefinition,
    UnknownUser,
)
from brewsvc.daemon.manager import DriverFactory

__all__ = [
    "BrewsvcError",
    "DriverFactory",
    "DriverUnavailable",
    "ExecutionFailure",
    "InternalInvariantViolation",
    "InvalidServiceDefinition",
    "InvocationContext",
    "RunInfo",
    "RunInfoGenerator",
    "RunState",
    "SystemdDriver",
    "UnknownUser",
    "UserRecord",
]
