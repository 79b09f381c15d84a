"""Service definitions built from formula plist templates."""

import plistlib
import re
from functools import cached_property
from typing import Any, Protocol
from xml.parsers.expat import ExpatError

from brewsvc.daemon.errors import InvalidServiceDefinition

_PLACEHOLDER = re.compile(r"\{\{([a-z][a-z0-9_]*)\}\}", re.IGNORECASE)


class FormulaLike(Protocol):
    name: str

    @property
    def plist_name(self) -> str: ...

    @property
    def plist(self) -> str | None: ...


def render_template(template: str, source: object) -> str:
    """Replace ``{{name}}`` with ``source.name``; unknown names become ""."""

    def replace(match: re.Match) -> str:
        value = getattr(source, match.group(1), None)
        if callable(value):
            value = value()
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(replace, template)


class ServiceDefinition:
    """What a formula declares about its service, read-only."""

    def __init__(self, formula: FormulaLike):
        self.formula = formula

    @property
    def id(self) -> str:
        return self.formula.plist_name

    @property
    def name(self) -> str:
        return self.formula.name

    @cached_property
    def plist(self) -> dict[str, Any]:
        template = self.formula.plist or ""
        try:
            plist = plistlib.loads(render_template(template, self.formula).encode("utf-8"))
        except (ExpatError, plistlib.InvalidFileException, ValueError) as e:
            raise InvalidServiceDefinition(self.name, str(e) or type(e).__name__) from e
        if not isinstance(plist, dict):
            raise InvalidServiceDefinition(self.name, f"expected a dictionary, got {type(plist).__name__}")
        return plist

    def __repr__(self) -> str:
        return f"ServiceDefinition(id={self.id!r}, name={self.name!r})"
