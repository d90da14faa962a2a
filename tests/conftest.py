"""Shared test fixtures for sysupdate tests."""

import logging
import stat
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sysupdate.config import (
    AptConfig,
    FirmwareConfig,
    PathsConfig,
    SyslogConfig,
    UpdateConfig,
    set_config_path,
)
from sysupdate.constants import DEFAULT_CONFIG_PATH

ToolFactory = Callable[[str, str], Path]


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo root logger changes made by configure_logging in CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    set_config_path(DEFAULT_CONFIG_PATH)


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding fake executables."""
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def make_tool(bin_dir: Path) -> ToolFactory:
    """Factory writing an executable /bin/sh script into bin_dir."""

    def _make(name: str, body: str) -> Path:
        path = bin_dir / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def calls_file(tmp_path: Path) -> Path:
    """File the fake tools append their arguments to."""
    return tmp_path / "calls.txt"


@pytest.fixture
def fake_apt(make_tool: ToolFactory, calls_file: Path) -> Callable[..., Path]:
    """Factory for a fake apt that records calls and exits with the given codes."""

    def _make(update: int = 0, upgrade: int = 0, autoremove: int = 0) -> Path:
        return make_tool(
            "apt",
            f"""echo "apt $*" >> "{calls_file}"
case "$1" in
  update) echo "Reading package lists..."; exit {update} ;;
  upgrade) echo "0 upgraded, 0 newly installed"; exit {upgrade} ;;
  autoremove) echo "0 to remove"; exit {autoremove} ;;
esac
exit 100""",
        )

    return _make


@pytest.fixture
def fake_fwupd(make_tool: ToolFactory, calls_file: Path) -> Callable[..., Path]:
    """Factory for a fake fwupdmgr.

    updates_output is printed verbatim by get-updates.
    """

    def _make(
        refresh_exit: int = 0,
        refresh_output: str = "Metadata refreshed",
        updates_output: str = "",
        update_exit: int = 0,
    ) -> Path:
        return make_tool(
            "fwupdmgr",
            f"""echo "fwupdmgr $*" >> "{calls_file}"
case "$1" in
  refresh) echo "{refresh_output}"; exit {refresh_exit} ;;
  get-updates) printf '%s' "{updates_output}"; exit 0 ;;
  update) echo "Installing"; exit {update_exit} ;;
esac
exit 1""",
        )

    return _make


@pytest.fixture
def update_config(tmp_path: Path, bin_dir: Path) -> UpdateConfig:
    """Configuration rooted in tmp_path with syslog disabled.

    apt and fwupdmgr point into bin_dir; neither exists until a test
    creates it with make_tool.
    """
    return UpdateConfig(
        paths=PathsConfig(
            log_file=tmp_path / "log" / "system_update.log",
            lock_file=tmp_path / "run" / "system_update.lock",
            firmware_log=tmp_path / "log" / "firmware_update.log",
        ),
        apt=AptConfig(exec=str(bin_dir / "apt")),
        firmware=FirmwareConfig(exec=str(bin_dir / "fwupdmgr")),
        syslog=SyslogConfig(enabled=False),
    )


@pytest.fixture
def config_file(tmp_path: Path, bin_dir: Path) -> Path:
    """TOML config equivalent to update_config, for CLI tests."""
    path = tmp_path / "config.toml"
    path.write_text(
        f"""[paths]
log_file = "{tmp_path / "log" / "system_update.log"}"
lock_file = "{tmp_path / "run" / "system_update.lock"}"
firmware_log = "{tmp_path / "log" / "firmware_update.log"}"

[apt]
exec = "{bin_dir / "apt"}"

[firmware]
exec = "{bin_dir / "fwupdmgr"}"

[syslog]
enabled = false
"""
    )
    return path
