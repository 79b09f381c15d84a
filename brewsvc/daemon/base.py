"""Run-state snapshot interface shared by both parsing strategies."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from brewsvc.daemon.commandline import Systemctl


class RunState(str, Enum):
    STARTED = "started"
    STOPPED = "stopped"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RunInfo:
    """Observed state of one unit; ``user`` is the owning uid, 0 for system."""

    state: RunState
    user: int | None = None


class RunInfoGenerator(ABC):
    """Reads unit state out of ``systemctl`` output.

    The snapshot is taken on the first :meth:`run_info` call and reused
    until :meth:`reset`, so a batch of lookups costs one invocation.
    """

    def __init__(self, systemctl: Systemctl):
        self.systemctl = systemctl
        self._snapshot: dict[str, RunInfo] | None = None

    def run_info(self, service_id: str) -> RunInfo:
        if self._snapshot is None:
            self._snapshot = self._take_snapshot()
        return self._snapshot.get(service_id) or self._missing()

    def reset(self) -> None:
        self._snapshot = None

    @abstractmethod
    def _take_snapshot(self) -> dict[str, RunInfo]:
        """Query systemctl and map service ids to what it reported."""

    @abstractmethod
    def _missing(self) -> RunInfo:
        """What to report for a service id absent from the snapshot."""
