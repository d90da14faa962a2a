"""Pydantic data models for sysupdate runs.

This package defines the data structures used throughout sysupdate for:
- Command and stage results (CommandResult, StageResult, StageOutcome)
- Firmware availability (FirmwareCheck)
- Run lock state (LockState, LockStatus)
- End-of-run summary (RunSummary)

Example:
    >>> from sysupdate.models import StageOutcome, StageResult
    >>> result = StageResult(stage="apt update", outcome=StageOutcome.SUCCESS)
    >>> result.model_dump_json()
"""

from .firmware import FirmwareCheck
from .lock import LockState, LockStatus
from .stage import CommandResult, StageOutcome, StageResult
from .summary import RunSummary

__all__ = [
    "CommandResult",
    "FirmwareCheck",
    "LockState",
    "LockStatus",
    "RunSummary",
    "StageOutcome",
    "StageResult",
]
