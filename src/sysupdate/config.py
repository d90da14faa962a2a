"""Configuration management for sysupdate."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    BENIGN_FIRMWARE_SIGNATURE,
    DEFAULT_CONFIG_PATH,
    DEFAULT_FIRMWARE_LOG,
    DEFAULT_LOCK_FILE,
    DEFAULT_LOG_FILE,
    FIRMWARE_AVAILABLE_MARKER,
    SCRIPT_NAME,
)


class PathsConfig(BaseModel):
    """Fixed file locations used by a run."""

    model_config = ConfigDict(frozen=True)

    log_file: Path = DEFAULT_LOG_FILE
    lock_file: Path = DEFAULT_LOCK_FILE
    firmware_log: Path = DEFAULT_FIRMWARE_LOG


class AptConfig(BaseModel):
    """Package manager invocation."""

    model_config = ConfigDict(frozen=True)

    exec: str = "apt"
    update_args: list[str] = Field(default_factory=lambda: ["update"])
    upgrade_args: list[str] = Field(default_factory=lambda: ["upgrade", "-y"])
    autoremove_args: list[str] = Field(default_factory=lambda: ["autoremove", "-y"])
    environment: dict[str, str] = Field(
        default_factory=lambda: {"DEBIAN_FRONTEND": "noninteractive"},
        description="Extra environment for apt (keeps upgrades non-interactive)",
    )


class FirmwareConfig(BaseModel):
    """Firmware utility invocation."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    exec: str = "fwupdmgr"
    refresh_args: list[str] = Field(default_factory=lambda: ["refresh"])
    list_args: list[str] = Field(default_factory=lambda: ["get-updates"])
    install_args: list[str] = Field(default_factory=lambda: ["update"])
    benign_signature: str = BENIGN_FIRMWARE_SIGNATURE
    available_marker: str = FIRMWARE_AVAILABLE_MARKER


class SyslogConfig(BaseModel):
    """System log mirroring."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    tag: str = SCRIPT_NAME
    address: str = "/dev/log"
    facility: str = "user"


class UpdateConfig(BaseModel):
    """Root configuration for sysupdate."""

    model_config = ConfigDict(frozen=True)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    apt: AptConfig = Field(default_factory=AptConfig)
    firmware: FirmwareConfig = Field(default_factory=FirmwareConfig)
    syslog: SyslogConfig = Field(default_factory=SyslogConfig)

    @property
    def log_dirs(self) -> list[Path]:
        """Directories that must exist before logging starts."""
        dirs: list[Path] = []
        for path in (self.paths.log_file, self.paths.firmware_log):
            if path.parent not in dirs:
                dirs.append(path.parent)
        return dirs


def load_config(config_path: Path) -> UpdateConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml

    Returns:
        Loaded configuration, or defaults if the file doesn't exist
    """
    if not config_path.exists():
        return UpdateConfig()
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return UpdateConfig.model_validate(data)


def write_config_template(config_path: Path) -> Path:
    """Write default config.toml template.

    Args:
        config_path: Destination file; parent directories are created

    Returns:
        Path to the written config file
    """
    defaults = UpdateConfig()
    template = defaults.model_dump(mode="json")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path


# Config file selected by the CLI main callback
_config_path: Path = DEFAULT_CONFIG_PATH


def get_config_path() -> Path:
    """Get the config file path chosen on the command line."""
    return _config_path


def set_config_path(path: Path) -> None:
    """Set the config file path. Called by CLI main callback."""
    global _config_path
    _config_path = path
