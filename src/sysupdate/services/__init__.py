"""External integrations for sysupdate.

This package provides interfaces to external tools and the host:
- commands: Subprocess execution with output appended to log files
- packages: apt index refresh, upgrade and autoremove
- firmware: fwupdmgr refresh, listing and install
- system: Privilege and process liveness checks
"""

from .commands import (
    CommandNotFoundError,
    append_output,
    capture_stdout,
    command_available,
    run_command,
    run_logged,
)
from .firmware import firmware_tool_available, install_updates, list_updates, refresh_metadata
from .packages import autoremove_packages, refresh_index, upgrade_packages
from .system import is_pid_running, is_privileged

__all__ = [
    "CommandNotFoundError",
    "append_output",
    "autoremove_packages",
    "capture_stdout",
    "command_available",
    "firmware_tool_available",
    "install_updates",
    "is_pid_running",
    "is_privileged",
    "list_updates",
    "refresh_index",
    "refresh_metadata",
    "run_command",
    "run_logged",
    "upgrade_packages",
]
