"""Constants for sysupdate."""

from pathlib import Path

# Tag used for syslog entries
SCRIPT_NAME = "system_update"

# Default filesystem locations
DEFAULT_CONFIG_PATH = Path("/etc/sysupdate/config.toml")
DEFAULT_LOG_FILE = Path("/var/log/system_update.log")
DEFAULT_LOCK_FILE = Path("/var/run/system_update.lock")
DEFAULT_FIRMWARE_LOG = Path("/var/log/firmware_update.log")

# fwupdmgr refresh failure that is normal on machines without capsule support
BENIGN_FIRMWARE_SIGNATURE = "UEFI capsule updates not available"
FIRMWARE_AVAILABLE_MARKER = "Available"

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_COMMAND_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128
