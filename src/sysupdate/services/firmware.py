"""fwupdmgr firmware utility operations."""

from pathlib import Path

from ..config import FirmwareConfig
from ..models import CommandResult
from .commands import capture_stdout, command_available, run_logged


def firmware_tool_available(config: FirmwareConfig) -> bool:
    """Return True if the firmware tool resolves on PATH."""
    return command_available(config.exec)


def refresh_metadata(config: FirmwareConfig, log_path: Path) -> CommandResult:
    """Refresh firmware metadata; output is appended to the firmware log."""
    return run_logged([config.exec, *config.refresh_args], log_path=log_path)


def list_updates(config: FirmwareConfig) -> CommandResult:
    """List advertised firmware updates (stdout only)."""
    return capture_stdout([config.exec, *config.list_args])


def install_updates(config: FirmwareConfig, log_path: Path) -> CommandResult:
    """Install firmware updates; output is appended to the firmware log."""
    return run_logged([config.exec, *config.install_args], log_path=log_path)
