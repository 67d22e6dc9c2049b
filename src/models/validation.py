"""Validation result models."""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldViolation(BaseModel):
    """A named field that failed a structural, range or format check."""
    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Dotted field path, __root__ for the record itself")
    reason: str = Field(..., description="Human-readable reason")


class ValidationResult(BaseModel, Generic[ModelT]):
    """Either the accepted record or every violation found in it."""
    value: Optional[ModelT] = None
    errors: list[FieldViolation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed, in report order."""
        return [violation.field for violation in self.errors]
