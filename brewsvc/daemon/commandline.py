"""Scope-aware ``systemctl`` invocation."""

import shlex

from brewsvc.daemon.context import InvocationContext
from brewsvc.daemon.runner import CommandRunner


class Systemctl:
    """Prefixes every call with ``--system`` or ``--user``.

    The scope defaults to the invoking user's: root talks to the system
    manager, anybody else to their user manager. User-scope calls carry
    ``XDG_RUNTIME_DIR`` so they work from sessions that lack it (sudo, cron).
    """

    def __init__(self, executable: str, context: InvocationContext, runner: CommandRunner | None = None):
        self.executable = executable
        self.context = context
        self.runner = runner or CommandRunner()

    def invoke(self, *args: str, scope: str | None = None) -> str:
        scope = scope or self.context.scope
        env: dict[str, str] = {}
        if scope == "user":
            env["XDG_RUNTIME_DIR"] = self.context.runtime_dir
        command_line = shlex.join([self.executable, f"--{scope}", *args])
        return self.runner.invoke(command_line, env)
