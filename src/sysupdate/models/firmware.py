"""Firmware availability model."""

from pydantic import BaseModel, Field

from .stage import StageResult


class FirmwareCheck(BaseModel):
    """Result of querying the firmware tool for updates.

    Attributes:
        tool_present: Whether the firmware tool was found (and enabled).
        refresh: Classified metadata refresh, None when the tool is absent.
        update_count: Number of updates the tool advertised.
    """

    tool_present: bool = Field(description="Firmware tool found on PATH")
    refresh: StageResult | None = Field(default=None, description="Metadata refresh result")
    update_count: int = Field(default=0, description="Advertised firmware updates")

    @property
    def available(self) -> bool:
        """True if at least one firmware update is advertised."""
        return self.update_count > 0
