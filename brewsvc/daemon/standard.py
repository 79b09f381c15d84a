"""Run-state snapshot from ``systemctl list-units``."""

from brewsvc.daemon.base import RunInfo, RunInfoGenerator, RunState

_SUFFIX = ".service"
_BULLETS = {"●", "*", "×"}


def convert_state(load: str, sub: str) -> RunState:
    if load == "not-found":
        return RunState.UNKNOWN
    if sub == "running":
        return RunState.STARTED
    if sub == "failed":
        return RunState.ERROR
    if sub == "exited":
        return RunState.STOPPED
    return RunState.UNKNOWN


def parse_list_units(output: str, uid: int) -> dict[str, RunInfo]:
    """Parse ``list-units --no-legend`` rows: UNIT LOAD ACTIVE SUB ..."""
    snapshot: dict[str, RunInfo] = {}
    for line in output.splitlines():
        items = line.split()
        if items and items[0] in _BULLETS:
            items = items[1:]
        if len(items) < 4:
            continue
        unit, load, _active, sub = items[:4]
        service_id = unit[: -len(_SUFFIX)] if unit.endswith(_SUFFIX) else unit
        snapshot.setdefault(service_id, RunInfo(state=convert_state(load, sub), user=uid))
    return snapshot


class StandardRunInfoGenerator(RunInfoGenerator):
    """Queries the user manager, then the system manager.

    System entries replace user entries with the same id. Ids that neither
    manager lists are reported as ``unknown``.
    """

    def _take_snapshot(self) -> dict[str, RunInfo]:
        snapshot: dict[str, RunInfo] = {}
        for scope, uid in (("user", self.systemctl.context.uid), ("system", 0)):
            output = self.systemctl.invoke(
                "--all", "--type=service", "--no-pager", "--no-legend", "list-units", scope=scope
            )
            snapshot.update(parse_list_units(output, uid))
        return snapshot

    def _missing(self) -> RunInfo:
        return RunInfo(state=RunState.UNKNOWN)
