"""Lock status model for the single-instance run lock.

The lock file itself holds only the owner's decimal PID; this model is
the in-memory view reported by the status command.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LockState(str, Enum):
    """State of the run lock."""

    FREE = "free"
    HELD = "held"
    STALE = "stale"


class LockStatus(BaseModel):
    """Current state of the run lock file."""

    path: Path = Field(description="Lock file path")
    state: LockState = Field(description="free, held or stale")
    pid: int | None = Field(default=None, description="PID recorded in the lock file")
