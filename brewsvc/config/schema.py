"""Configuration schema using Pydantic."""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _default_homebrew_prefix() -> Path:
    return Path(os.environ.get("HOMEBREW_PREFIX", "/home/linuxbrew/.linuxbrew"))


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Config(Base):
    """Root configuration for brewsvc."""

    systemctl: str | None = None
    strategy: Literal["experimental", "standard"] = "experimental"
    homebrew_prefix: Path = Field(default_factory=_default_homebrew_prefix)
    system_unit_dir: Path = Path("/lib/systemd/system")
    user_unit_dir: Path = Path(".config/systemd/user")  # relative to each user's home
    runtime_dir: str = "/run/user/{uid}"
    check_owner: bool = True
