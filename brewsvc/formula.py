"""Installed Homebrew formulae and the launchd plists they ship."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Formula:
    """An installed formula, i.e. a directory under ``<prefix>/opt``.

    The attribute names double as ``{{placeholder}}`` names in plist
    templates.
    """

    name: str
    homebrew_prefix: Path

    @property
    def plist_name(self) -> str:
        return f"homebrew.mxcl.{self.name}"

    @property
    def opt_prefix(self) -> Path:
        return self.homebrew_prefix / "opt" / self.name

    @property
    def prefix(self) -> Path:
        return self.opt_prefix.resolve()

    @property
    def bin(self) -> Path:
        return self.prefix / "bin"

    @property
    def sbin(self) -> Path:
        return self.prefix / "sbin"

    @property
    def opt_bin(self) -> Path:
        return self.opt_prefix / "bin"

    @property
    def opt_sbin(self) -> Path:
        return self.opt_prefix / "sbin"

    @property
    def etc(self) -> Path:
        return self.homebrew_prefix / "etc"

    @property
    def var(self) -> Path:
        return self.homebrew_prefix / "var"

    @property
    def plist_path(self) -> Path:
        return self.opt_prefix / f"{self.plist_name}.plist"

    @property
    def plist(self) -> str | None:
        """The raw plist template, or None for formulae without a service."""
        if not self.plist_path.is_file():
            return None
        return self.plist_path.read_text(encoding="utf-8")


def installed_formulae(homebrew_prefix: Path) -> list[Formula]:
    opt = Path(homebrew_prefix) / "opt"
    if not opt.is_dir():
        return []
    return sorted(
        (Formula(name=entry.name, homebrew_prefix=Path(homebrew_prefix)) for entry in opt.iterdir() if entry.is_dir()),
        key=lambda formula: formula.name,
    )
