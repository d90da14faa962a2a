"""Run summary model emitted at the end of a run."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


class RunSummary(BaseModel):
    """Outcome of a full update run.

    Attributes:
        exit_code: Process exit code for the run.
        completed_stages: Stages that completed, in execution order.
        firmware_updates: Number of firmware updates found (0 if none or tool absent).
        firmware_installed: Whether firmware updates were installed.
        log_file: Local log file location.
        firmware_log: Firmware tool output log location.
        error: Error message for a failed run, None on success.
        started_at: When the run started.
        finished_at: When the run ended.
    """

    exit_code: int = Field(default=0, description="Process exit code")
    completed_stages: list[str] = Field(default_factory=list, description="Completed stages")
    firmware_updates: int = Field(default=0, description="Firmware updates found")
    firmware_installed: bool = Field(default=False, description="Firmware updates installed")
    log_file: Path = Field(description="Local log file")
    firmware_log: Path = Field(description="Firmware output log")
    error: str | None = Field(default=None, description="Error message if the run failed")
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = Field(default=None)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
