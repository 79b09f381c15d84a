"""Errors raised while driving systemd."""


class BrewsvcError(RuntimeError):
    """Base class for every error brewsvc raises on purpose."""


class ExecutionFailure(BrewsvcError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Failure while executing `{command}` (exit status {returncode})")


class InternalInvariantViolation(BrewsvcError):
    """``systemctl`` output no longer matches what the parser expects."""


class DriverUnavailable(BrewsvcError):
    """No usable service manager on this host."""


class InvalidServiceDefinition(BrewsvcError):
    """A formula's plist template does not parse to a property list dictionary."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid service definition for `{name}`: {reason}")


class UnknownUser(BrewsvcError):
    """A service runs under a uid that has no passwd entry."""

    def __init__(self, uid: int):
        self.uid = uid
        super().__init__(f"No user with uid {uid} exists on this system")
