"""Host queries: privilege and process liveness."""

import os


def is_privileged() -> bool:
    """Return True if running with an effective uid of root."""
    return os.geteuid() == 0


def is_pid_running(pid: int) -> bool:
    """Check if a process with given PID is running."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)  # Signal 0 doesn't kill, just checks
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but owned by another user
        return True
    except OSError:
        return False
    return True
