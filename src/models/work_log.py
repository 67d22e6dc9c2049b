"""Work log model - per-day, per-staff record of worked time."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.fields import DateString, UuidString, reject_explicit_null


MAX_CATEGORY_MINUTES = 480
MAX_TOTAL_MINUTES = 960
WORK_LOG_NOTES_MAX_LENGTH = 1000


class WorkLog(BaseModel):
    """Work log entry submitted by staff at the end of a shift."""
    model_config = ConfigDict(strict=True)

    user_id: UuidString = Field(..., description="Staff user ID (UUID FK)")
    date: DateString = Field(..., description="Work date (YYYY-MM-DD)")
    # Nullable but required: callers must say the boundary was not recorded
    time_in: Optional[str] = Field(..., description="Shift start, null if not recorded")
    time_out: Optional[str] = Field(..., description="Shift end, null if not recorded")
    break_minutes: int = Field(..., ge=0, le=MAX_CATEGORY_MINUTES)
    laundry_minutes: int = Field(..., ge=0, le=MAX_CATEGORY_MINUTES)
    breakfast_minutes: int = Field(..., ge=0, le=MAX_CATEGORY_MINUTES)
    total_minutes: int = Field(
        ...,
        ge=0,
        le=MAX_TOTAL_MINUTES,
        description="Worked minutes; not required to match the category minutes"
    )
    notes: Optional[str] = Field(None, max_length=WORK_LOG_NOTES_MAX_LENGTH)

    @field_validator("notes", mode="before")
    @classmethod
    def notes_not_null(cls, value):
        return reject_explicit_null(value)
