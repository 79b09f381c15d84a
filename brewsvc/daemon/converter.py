"""Translate launchd property lists into systemd unit files."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from brewsvc.services.definition import ServiceDefinition

SECTIONS = ("Unit", "Service", "Install")


@dataclass
class UnitDescription:
    """Ordered ``[Section]`` -> ``Key=Value`` mapping of a systemd unit.

    Section order is fixed (Unit, Service, Install); keys keep insertion
    order. Empty sections are left out of the rendered text.
    """

    sections: dict[str, dict[str, str]] = field(default_factory=lambda: {name: {} for name in SECTIONS})

    def set(self, section: str, key: str, value: str) -> None:
        self.sections[section][key] = value

    def get(self, section: str, key: str) -> str | None:
        return self.sections.get(section, {}).get(key)

    def render(self) -> str:
        lines: list[str] = []
        for section, values in self.sections.items():
            if not values:
                continue
            lines.append(f"[{section}]")
            lines.extend(f"{key}={value}" for key, value in values.items())
            lines.append("")
        return "\n".join(lines)


@dataclass
class ConversionResult:
    """A unit plus the plist keys that had no systemd counterpart."""

    unit: UnitDescription
    unsupported_keys: list[str] = field(default_factory=list)

    @property
    def warning(self) -> str | None:
        if not self.unsupported_keys:
            return None
        keys = "', '".join(self.unsupported_keys)
        return f"The following plist keys are not yet supported, and were ignored: '{keys}'."

    def render(self) -> str:
        return self.unit.render()


def quote_argument(arg: str) -> str:
    """Single-quote one ``ExecStart`` word the way systemd splits them."""
    escaped = str(arg).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class PlistToServiceFileConverter:
    """Maps the supported subset of launchd keys onto a systemd unit."""

    def convert(self, definition: "ServiceDefinition") -> ConversionResult:
        return self.convert_plist(definition.plist)

    def convert_plist(self, plist: dict[str, Any]) -> ConversionResult:
        unit = UnitDescription()
        unsupported: list[str] = []

        for key, value in plist.items():
            if key == "KeepAlive":
                unit.set("Service", "Restart", "always")
            elif key == "Label":
                unit.set("Unit", "Description", str(value))
            elif key == "ProgramArguments":
                unit.set("Service", "ExecStart", " ".join(quote_argument(arg) for arg in value))
            elif key == "RunAtLoad":
                # No systemd equivalent; enabling the unit covers it.
                continue
            elif key == "StandardErrorPath":
                unit.set("Service", "StandardError", f"file:{value}")
            elif key == "WorkingDirectory":
                unit.set("Service", "WorkingDirectory", str(value))
            else:
                unsupported.append(key)

        unit.set("Service", "Type", "simple")
        unit.set("Install", "WantedBy", "default.target")

        result = ConversionResult(unit=unit, unsupported_keys=unsupported)
        if result.warning:
            logger.warning(result.warning)
        return result
