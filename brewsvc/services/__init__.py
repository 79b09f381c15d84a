"""Formula services: definitions, status handles and batch actions."""

from brewsvc.services.controller import ActionResult, Outcome, Selection, ServiceController
from brewsvc.services.definition import ServiceDefinition, render_template
from brewsvc.services.service import Service

__all__ = [
    "ActionResult",
    "Outcome",
    "Selection",
    "Service",
    "ServiceController",
    "ServiceDefinition",
    "render_template",
]
