"""apt package manager operations.

Each operation runs non-interactively and appends its output to the
local log file.
"""

from pathlib import Path

from ..config import AptConfig
from ..models import CommandResult
from .commands import run_logged


def _run_apt(config: AptConfig, args: list[str], log_path: Path) -> CommandResult:
    return run_logged([config.exec, *args], log_path=log_path, env=config.environment)


def refresh_index(config: AptConfig, log_path: Path) -> CommandResult:
    """Refresh the package index (``apt update``)."""
    return _run_apt(config, config.update_args, log_path)


def upgrade_packages(config: AptConfig, log_path: Path) -> CommandResult:
    """Upgrade installed packages (``apt upgrade -y``)."""
    return _run_apt(config, config.upgrade_args, log_path)


def autoremove_packages(config: AptConfig, log_path: Path) -> CommandResult:
    """Remove packages that are no longer needed (``apt autoremove -y``)."""
    return _run_apt(config, config.autoremove_args, log_path)
