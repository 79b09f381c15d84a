"""Identity of the invoking user and of service owners."""

import os
import pwd
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UserRecord:
    """The parts of a passwd entry brewsvc cares about."""

    uid: int
    name: str
    home: Path

    @property
    def is_root(self) -> bool:
        return self.uid == 0

    @classmethod
    def from_uid(cls, uid: int) -> "UserRecord":
        entry = pwd.getpwuid(uid)
        return cls(uid=entry.pw_uid, name=entry.pw_name, home=Path(entry.pw_dir))


@dataclass(frozen=True)
class InvocationContext:
    """Who is running brewsvc, and where their systemd state lives.

    Root invocations talk to the system manager; everybody else talks to
    their own ``systemctl --user`` instance, which needs ``XDG_RUNTIME_DIR``
    to find its bus.
    """

    user: UserRecord
    runtime_dir_template: str = "/run/user/{uid}"

    @property
    def uid(self) -> int:
        return self.user.uid

    @property
    def scope(self) -> str:
        return "system" if self.user.is_root else "user"

    @property
    def runtime_dir(self) -> str:
        return self.runtime_dir_template.format(uid=self.user.uid)

    @classmethod
    def current(cls, runtime_dir_template: str = "/run/user/{uid}") -> "InvocationContext":
        return cls(user=UserRecord.from_uid(os.getuid()), runtime_dir_template=runtime_dir_template)
