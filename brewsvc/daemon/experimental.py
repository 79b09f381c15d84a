"""Run-state snapshot from the cgroup tree printed by ``systemctl status``."""

import re

from brewsvc.daemon.base import RunInfo, RunInfoGenerator, RunState
from brewsvc.daemon.errors import InternalInvariantViolation

_SYSTEM_SLICE = re.compile(r"system\.slice")
_USER_SLICE = re.compile(r"user-(\d+)\.slice")
_SERVICE = re.compile(r"([\w+,.@-]+)\.service")


def parse_status_tree(output: str) -> dict[str, int]:
    """Map every ``*.service`` in the tree to the uid of the slice above it.

    ``system.slice`` belongs to uid 0, ``user-<uid>.slice`` to ``<uid>``.
    """
    snapshot: dict[str, int] = {}
    uid: int | None = None
    for line in output.splitlines():
        if _SYSTEM_SLICE.search(line):
            uid = 0
        match = _USER_SLICE.search(line)
        if match:
            uid = int(match.group(1))
        match = _SERVICE.search(line)
        if match:
            if uid is None:
                raise InternalInvariantViolation(
                    f"Service {match.group(1)!r} listed outside of any slice; "
                    "`systemctl status` output might differ from what is expected."
                )
            snapshot[match.group(1)] = uid
    return snapshot


class ExperimentalRunInfoGenerator(RunInfoGenerator):
    """One ``systemctl --system status`` call covers every user's services.

    Anything in the tree is running; anything else is reported stopped.
    This strategy cannot see failed or unknown units.
    """

    def _take_snapshot(self) -> dict[str, RunInfo]:
        output = self.systemctl.invoke("status", "--no-pager", "--no-legend", scope="system")
        return {
            service_id: RunInfo(state=RunState.STARTED, user=uid)
            for service_id, uid in parse_status_tree(output).items()
        }

    def _missing(self) -> RunInfo:
        return RunInfo(state=RunState.STOPPED)
