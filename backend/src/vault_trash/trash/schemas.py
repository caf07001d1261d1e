"""Pydantic schemas for trash purge settings and results.

This module defines:
- PurgeSettings: Explicit configuration passed into a purge run
- PurgeResult: Outcome of one purge run
- PurgeReport: Preview of what a purge run would delete
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..config import DEFAULT_TRASH_AUTO_DELETE_DAYS, Settings


class PurgeSettings(BaseModel):
    """Retention configuration for the trash purge.

    retention_days may be zero or negative: that disables purging entirely,
    it is not a validation error.
    """

    retention_days: int = Field(
        default=DEFAULT_TRASH_AUTO_DELETE_DAYS,
        description="Days a cipher stays in the trash before permanent deletion (<= 0 disables)"
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PurgeSettings":
        return cls(retention_days=settings.TRASH_AUTO_DELETE_DAYS)

    @property
    def enabled(self) -> bool:
        """Whether auto-purge is switched on."""
        return self.retention_days > 0


class PurgeResult(BaseModel):
    """Outcome of a single purge run."""

    retention_days: int
    enabled: bool
    cutoff: Optional[str] = Field(
        default=None,
        description="Cutoff timestamp used (None when disabled)"
    )
    eligible_count: int = Field(
        default=0,
        ge=0,
        description="Ciphers counted as eligible before the delete"
    )
    deleted_count: int = Field(
        default=0,
        ge=0,
        description="Ciphers actually removed by the delete statement"
    )
    started_at: datetime
    completed_at: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def count_mismatch(self) -> bool:
        """Whether the delete removed a different number of rows than counted."""
        return self.eligible_count != self.deleted_count


class PurgeReport(BaseModel):
    """Preview of ciphers eligible for permanent deletion.

    Produced without deleting anything.
    """

    retention_days: int
    enabled: bool
    cutoff: Optional[str] = None
    eligible_count: int = Field(default=0, ge=0)
