"""Stage policy: turn raw command results into stage outcomes.

These functions decide which failures abort a run and which are only
reported. They do no I/O.
"""

from ..models import CommandResult, StageOutcome, StageResult

APT_UPDATE = "apt update"
APT_UPGRADE = "apt upgrade"
APT_AUTOREMOVE = "apt autoremove"
FIRMWARE_CHECK = "firmware check"
FIRMWARE_INSTALL = "firmware install"


def classify_package_stage(stage: str, result: CommandResult) -> StageResult:
    """Package manager stages are fatal on any non-zero exit."""
    if result.succeeded:
        return StageResult(
            stage=stage,
            exit_code=result.exit_code,
            output=result.output,
            outcome=StageOutcome.SUCCESS,
            message=f"{stage} completed successfully",
        )
    return StageResult(
        stage=stage,
        exit_code=result.exit_code,
        output=result.output,
        outcome=StageOutcome.FATAL,
        message=f"{stage} failed",
    )


def classify_firmware_refresh(result: CommandResult, benign_signature: str) -> StageResult:
    """Firmware metadata refresh never aborts a run.

    A failure carrying the benign signature is normal on systems without
    capsule update support and is reported as informational. Any other
    failure is a warning. Only this refresh's output is searched, so a
    signature left in the firmware log by an earlier run cannot mask a new
    failure.
    """
    if result.succeeded:
        outcome = StageOutcome.SUCCESS
        message = "Firmware metadata refreshed successfully"
    elif benign_signature and benign_signature in result.output:
        outcome = StageOutcome.SUCCESS
        message = "Firmware capsule updates not available (this is normal for many systems)"
    else:
        outcome = StageOutcome.WARNING
        message = f"Failed to refresh firmware metadata (exit code: {result.exit_code})"

    return StageResult(
        stage=FIRMWARE_CHECK,
        exit_code=result.exit_code,
        output=result.output,
        outcome=outcome,
        message=message,
    )


def count_available_updates(output: str, marker: str) -> int:
    """Count lines of update listing output that contain the marker."""
    return sum(1 for line in output.splitlines() if marker in line)


def classify_firmware_install(result: CommandResult) -> StageResult:
    """Firmware installation is fatal on any non-zero exit."""
    if result.succeeded:
        return StageResult(
            stage=FIRMWARE_INSTALL,
            exit_code=result.exit_code,
            output=result.output,
            outcome=StageOutcome.SUCCESS,
            message="Firmware updates installed successfully",
        )
    return StageResult(
        stage=FIRMWARE_INSTALL,
        exit_code=result.exit_code,
        output=result.output,
        outcome=StageOutcome.FATAL,
        message=f"Failed to install firmware updates (exit code: {result.exit_code})",
    )
