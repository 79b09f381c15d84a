"""Point-in-time view of one formula service."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from brewsvc.daemon.base import RunState
from brewsvc.daemon.context import UserRecord
from brewsvc.services.definition import ServiceDefinition


@dataclass(frozen=True)
class Service:
    """Status snapshot of a service. Derived on every query, never stored."""

    definition: ServiceDefinition
    state: RunState
    user: UserRecord | None = None
    file: Path | None = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def user_name(self) -> str | None:
        return self.user.name if self.user else None

    @property
    def running(self) -> bool:
        return self.state == RunState.STARTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.state.value,
            "user": self.user_name,
            "file": str(self.file) if self.file else None,
        }
