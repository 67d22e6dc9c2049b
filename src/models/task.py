"""Task models - cleaning jobs created by reception and worked by housekeeping."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.fields import DateString, UuidString, reject_explicit_null


class CleaningType(str, Enum):
    """Cleaning type codes."""
    W = "W"  # departure
    P = "P"  # arrival
    T = "T"  # stay-over
    O = "O"  # refresh
    G = "G"  # general
    S = "S"  # standard


class TaskStatus(str, Enum):
    """Task lifecycle states."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    DONE = "done"
    REPAIR_NEEDED = "repair_needed"


NOTES_MAX_LENGTH = 2000
ISSUE_DESCRIPTION_MAX_LENGTH = 5000
MIN_GUESTS = 1
MAX_GUESTS = 20

_TEXT_FIELDS = ("reception_notes", "housekeeping_notes", "issue_description")


class TaskInput(BaseModel):
    """Task as submitted by reception when creating a cleaning job."""
    model_config = ConfigDict(strict=True)

    cleaning_type: CleaningType = Field(
        ...,
        strict=False,
        description="Cleaning type code: W, P, T, O, G, S"
    )
    guest_count: int = Field(..., ge=MIN_GUESTS, le=MAX_GUESTS, description="Guests (1-20)")
    reception_notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    housekeeping_notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    issue_description: Optional[str] = Field(None, max_length=ISSUE_DESCRIPTION_MAX_LENGTH)
    date: DateString = Field(..., description="Task date (YYYY-MM-DD)")
    room_id: UuidString = Field(..., description="Room ID (UUID FK)")

    # None means "not supplied"; an explicit null is a violation
    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def text_not_null(cls, value):
        return reject_explicit_null(value)


class TaskUpdate(BaseModel):
    """Partial task update - every field optional, same rules when present."""
    model_config = ConfigDict(strict=True)

    cleaning_type: Optional[CleaningType] = Field(None, strict=False)
    guest_count: Optional[int] = Field(None, ge=MIN_GUESTS, le=MAX_GUESTS)
    reception_notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    housekeeping_notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    issue_description: Optional[str] = Field(None, max_length=ISSUE_DESCRIPTION_MAX_LENGTH)
    date: Optional[DateString] = None
    room_id: Optional[UuidString] = None

    @field_validator("*", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_explicit_null(value)

    def changes(self) -> dict:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(mode="json", exclude_unset=True)
