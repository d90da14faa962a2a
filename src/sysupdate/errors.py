"""Error taxonomy for sysupdate runs.

Every error is terminal for the run. Stale locks are not errors: they are
recovered by the lock manager and only logged.
"""


class UpdateError(Exception):
    """Base exception for update run failures."""


class PrivilegeError(UpdateError, PermissionError):
    """Raised when the run is started without root privileges."""


class AlreadyRunningError(UpdateError):
    """Raised when a live process already holds the run lock."""

    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Script is already running (PID: {pid})")


class StageFailedError(UpdateError):
    """Raised when a fatal stage exits non-zero."""

    def __init__(self, stage: str, exit_code: int, message: str | None = None) -> None:
        self.stage = stage
        self.exit_code = exit_code
        super().__init__(message or f"{stage} failed (exit code: {exit_code})")


class RunInterrupted(UpdateError):
    """Raised from a signal handler when the run is interrupted or terminated."""

    def __init__(self, signum: int) -> None:
        self.signum = int(signum)
        super().__init__(f"Interrupted by signal {self.signum}")
