"""Run controller: the staged update sequence.

A run checks privileges, takes the single-instance lock, then runs the
apt stages and the firmware stages in order. The first fatal stage
aborts the run. The lock is released on every exit path, including
SIGINT and SIGTERM.
"""

import contextlib
import logging
import signal
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from types import FrameType

from ..config import AptConfig, UpdateConfig
from ..constants import EXIT_FAILURE, EXIT_OK, EXIT_SIGNAL_BASE
from ..errors import PrivilegeError, RunInterrupted, UpdateError
from ..logging import attach_handlers, create_file_handler, create_syslog_handler
from ..models import CommandResult, FirmwareCheck, RunSummary, StageOutcome, StageResult
from ..services import (
    autoremove_packages,
    firmware_tool_available,
    install_updates,
    is_privileged,
    list_updates,
    refresh_index,
    refresh_metadata,
    upgrade_packages,
)
from .lock_manager import hold_lock
from .stages import (
    APT_AUTOREMOVE,
    APT_UPDATE,
    APT_UPGRADE,
    FIRMWARE_CHECK,
    classify_firmware_install,
    classify_firmware_refresh,
    classify_package_stage,
    count_available_updates,
)

logger = logging.getLogger(__name__)

PackageOperation = Callable[[AptConfig, Path], CommandResult]

INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _handle_signal(signum: int, frame: FrameType | None) -> None:
    """Turn an interrupt or termination signal into an exception.

    Later signals are ignored so they cannot cut lock cleanup short.
    """
    for sig in INTERRUPT_SIGNALS:
        signal.signal(sig, signal.SIG_IGN)
    raise RunInterrupted(signum)


@contextlib.contextmanager
def _signals_raise() -> Iterator[None]:
    """Raise RunInterrupted on SIGINT/SIGTERM, restoring handlers afterwards."""
    original_handlers = {sig: signal.signal(sig, _handle_signal) for sig in INTERRUPT_SIGNALS}
    try:
        yield
    finally:
        for sig, handler in original_handlers.items():
            signal.signal(sig, handler)


class UpdateController:
    """Runs one update pass with the given immutable configuration.

    Attributes:
        config: Paths, command lines and sink settings for the run.
        summary: Filled in as the run progresses; final after run() returns.
    """

    def __init__(self, config: UpdateConfig) -> None:
        self.config = config
        self.summary = RunSummary(
            log_file=config.paths.log_file,
            firmware_log=config.paths.firmware_log,
        )

    def run(self) -> int:
        """Execute the run and return the process exit code."""
        with (
            _signals_raise(),
            attach_handlers(
                create_syslog_handler(self.config),
                create_file_handler(self.config),
            ),
        ):
            try:
                self._require_privilege()
                self._execute()
            except RunInterrupted as e:
                logger.warning(f"{e}, cleaning up")
                return self._finish(EXIT_SIGNAL_BASE + e.signum, str(e))
            except UpdateError as e:
                logger.error(str(e))
                return self._finish(EXIT_FAILURE, str(e))
            return self._finish(EXIT_OK)

    def _finish(self, exit_code: int, error: str | None = None) -> int:
        self.summary.exit_code = exit_code
        self.summary.error = error
        self.summary.finished_at = datetime.now()
        return exit_code

    def _require_privilege(self) -> None:
        if not is_privileged():
            raise PrivilegeError("This script must be run as root")

    def _ensure_log_dirs(self) -> None:
        for directory in self.config.log_dirs:
            directory.mkdir(parents=True, exist_ok=True)

    def _execute(self) -> None:
        paths = self.config.paths
        with hold_lock(paths.lock_file):
            self._ensure_log_dirs()

            logger.info("Starting system update process")
            logger.info(f"Log file: {paths.log_file}")
            logger.info(f"Firmware log: {paths.firmware_log}")

            self.run_package_stage(1, APT_UPDATE, refresh_index)
            self.run_package_stage(2, APT_UPGRADE, upgrade_packages)
            self.run_package_stage(3, APT_AUTOREMOVE, autoremove_packages)

            logger.info("Step 4: Checking for firmware updates...")
            check = self.check_firmware()
            self._record(FIRMWARE_CHECK)
            self.summary.firmware_updates = check.update_count

            if check.available:
                logger.info("Firmware updates are available")
                logger.info("Step 5: Installing firmware updates...")
                self.install_firmware()
            else:
                logger.info("No firmware updates available - skipping installation")

            logger.info("System update process completed successfully")
            self._log_summary()

    def run_package_stage(self, number: int, stage: str, operation: PackageOperation) -> StageResult:
        """Run one apt stage; raises StageFailedError on non-zero exit."""
        logger.info(f"Step {number}: Running {stage}...")
        result = classify_package_stage(
            stage, operation(self.config.apt, self.config.paths.log_file)
        )
        self._apply(result)
        return result

    def check_firmware(self) -> FirmwareCheck:
        """Query the firmware tool for available updates.

        Never raises for firmware problems: a missing tool means no updates,
        and a failed metadata refresh is only reported.
        """
        firmware = self.config.firmware
        tool = Path(firmware.exec).name

        if not firmware.enabled:
            logger.info("Firmware updates disabled in configuration - skipping firmware check")
            return FirmwareCheck(tool_present=False)

        logger.info("Checking for firmware updates...")
        if not firmware_tool_available(firmware):
            logger.warning(f"{tool} not available - skipping firmware check")
            return FirmwareCheck(tool_present=False)

        logger.info(f"Using {tool} to check firmware updates")
        refresh = classify_firmware_refresh(
            refresh_metadata(firmware, self.config.paths.firmware_log),
            firmware.benign_signature,
        )
        self._apply(refresh)

        listing = list_updates(firmware)
        count = count_available_updates(listing.output, firmware.available_marker)
        if count > 0:
            logger.info(f"Found {count} firmware update(s) available")
        else:
            logger.info("No firmware updates available")

        return FirmwareCheck(tool_present=True, refresh=refresh, update_count=count)

    def install_firmware(self) -> StageResult:
        """Install firmware updates; raises StageFailedError on non-zero exit."""
        logger.info("Installing firmware updates...")
        result = classify_firmware_install(
            install_updates(self.config.firmware, self.config.paths.firmware_log)
        )
        self._apply(result)
        self.summary.firmware_installed = True
        return result

    def _apply(self, result: StageResult) -> None:
        """Log a non-fatal result, or raise for a fatal one."""
        result.raise_for_outcome()
        if result.outcome is StageOutcome.WARNING:
            logger.warning(result.message)
        else:
            logger.info(result.message)
        if result.stage != FIRMWARE_CHECK:
            self._record(result.stage)

    def _record(self, stage: str) -> None:
        if stage not in self.summary.completed_stages:
            self.summary.completed_stages.append(stage)

    def _log_summary(self) -> None:
        paths = self.config.paths
        logger.info("=== UPDATE SUMMARY ===")
        logger.info(f"Completed stages: {', '.join(self.summary.completed_stages)}")
        logger.info("All system updates completed")
        logger.info(f"Check logs at: {paths.log_file}")
        logger.info(f"Firmware logs at: {paths.firmware_log}")
