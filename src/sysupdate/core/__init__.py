"""Core run logic for sysupdate.

This package contains:
- lock_manager: PID lock file acquisition, stale detection and release
- stages: Stage policy classifying command results into outcomes
- controller: The staged update run
"""

from .controller import UpdateController
from .lock_manager import acquire_lock, get_lock_status, hold_lock, read_lock_pid, release_lock
from .stages import (
    APT_AUTOREMOVE,
    APT_UPDATE,
    APT_UPGRADE,
    FIRMWARE_CHECK,
    FIRMWARE_INSTALL,
    classify_firmware_install,
    classify_firmware_refresh,
    classify_package_stage,
    count_available_updates,
)

__all__ = [
    "APT_AUTOREMOVE",
    "APT_UPDATE",
    "APT_UPGRADE",
    "FIRMWARE_CHECK",
    "FIRMWARE_INSTALL",
    "UpdateController",
    "acquire_lock",
    "classify_firmware_install",
    "classify_firmware_refresh",
    "classify_package_stage",
    "count_available_updates",
    "get_lock_status",
    "hold_lock",
    "read_lock_pid",
    "release_lock",
]
