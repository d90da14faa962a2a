"""Stage result model.

Each external command a run issues is reduced to a StageResult whose
outcome decides whether the run continues, continues with a warning, or
aborts.
"""

from enum import Enum

from pydantic import BaseModel, Field

from ..errors import StageFailedError


class StageOutcome(str, Enum):
    """Discriminated outcome of a stage."""

    SUCCESS = "success"
    WARNING = "warning"
    FATAL = "fatal"


class CommandResult(BaseModel):
    """Raw result of one external command invocation."""

    args: list[str] = Field(description="Command line that was executed")
    exit_code: int = Field(description="Process exit status")
    output: str = Field(default="", description="Combined stdout+stderr")

    @property
    def succeeded(self) -> bool:
        """True if the command exited 0."""
        return self.exit_code == 0


class StageResult(BaseModel):
    """Classified result of a stage.

    Attributes:
        stage: Stage name (e.g. "apt update").
        exit_code: Exit status of the underlying command.
        output: Captured command output.
        outcome: success, warning (logged, run continues) or fatal (run aborts).
        message: Log message describing the outcome.
    """

    stage: str = Field(description="Stage name")
    exit_code: int = Field(default=0, description="Exit code from command")
    output: str = Field(default="", description="Captured stdout+stderr")
    outcome: StageOutcome = Field(description="Classified outcome")
    message: str = Field(default="", description="Log message for the outcome")

    @property
    def is_fatal(self) -> bool:
        return self.outcome is StageOutcome.FATAL

    def raise_for_outcome(self) -> None:
        """Raise StageFailedError if the outcome is fatal."""
        if self.is_fatal:
            raise StageFailedError(self.stage, self.exit_code, self.message or None)
