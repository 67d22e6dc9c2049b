"""Shared field types for record schemas."""

import re
from typing import Annotated
from pydantic import AfterValidator
from pydantic_core import PydanticCustomError


# Pattern only: "2024-02-30" and "2024-13-01" are accepted
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def _check_date_format(value: str) -> str:
    if not DATE_PATTERN.fullmatch(value):
        raise PydanticCustomError("date_format", "Date must use the YYYY-MM-DD format")
    return value


def _check_uuid_format(value: str) -> str:
    if not UUID_PATTERN.fullmatch(value):
        raise PydanticCustomError("uuid_format", "Value must be a valid UUID string")
    return value


DateString = Annotated[str, AfterValidator(_check_date_format)]
UuidString = Annotated[str, AfterValidator(_check_uuid_format)]


def reject_explicit_null(value):
    """Before-validator for optional fields that may be omitted but never null."""
    if value is None:
        raise PydanticCustomError("null_not_allowed", "Field may be omitted but not null")
    return value
