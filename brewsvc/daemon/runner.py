"""Blocking execution of external commands."""

import os
import shlex
import subprocess

from loguru import logger

from brewsvc.daemon.errors import ExecutionFailure


class CommandRunner:
    """Runs a fully assembled command line and returns its stdout.

    The caller is responsible for quoting: the line is split with
    :func:`shlex.split` and executed without a shell. Standard error never
    reaches the caller; it is only logged when the command fails.
    """

    def invoke(self, command_line: str, extra_env: dict[str, str] | None = None) -> str:
        logger.debug(f"Executing `{command_line}`")
        env = dict(os.environ)
        if extra_env:
            env.update(extra_env)

        result = subprocess.run(
            shlex.split(command_line),
            capture_output=True,
            text=True,
            env=env,
        )
        if result.returncode != 0:
            if result.stderr.strip():
                logger.debug(f"`{command_line}` stderr: {result.stderr.strip()}")
            raise ExecutionFailure(command_line, result.returncode, result.stderr)
        return result.stdout
