"""Small filesystem and session helpers."""

import os
from pathlib import Path

from brewsvc.daemon.context import UserRecord


def homebrew_owner(prefix: Path) -> UserRecord:
    """The user owning the Homebrew installation directory."""
    return UserRecord.from_uid(Path(prefix).stat().st_uid)


def ensure_homebrew_owner(prefix: Path, uid: int | None = None) -> None:
    """Raise unless ``uid`` (default: the caller) owns ``prefix``."""
    owner = homebrew_owner(prefix)
    uid = os.getuid() if uid is None else uid
    if owner.uid != uid:
        raise PermissionError(
            f"brewsvc can only be run by `{owner.name}`, the owner of the Homebrew installation."
        )
