"""Record validation - the single gate for task and work log input.

Failures are returned as data so a form can show every problem at once;
nothing here raises for bad input.
"""

from collections.abc import Mapping
from typing import Any, Type
from pydantic import ValidationError

from src.models.task import TaskInput, TaskUpdate
from src.models.validation import FieldViolation, ModelT, ValidationResult
from src.models.work_log import WorkLog
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)

ROOT_FIELD = "__root__"


def _violations_from(error: ValidationError) -> list[FieldViolation]:
    """Flatten pydantic errors into one violation per failed check."""
    violations = []
    for item in error.errors(include_url=False):
        field = ".".join(str(part) for part in item["loc"]) or ROOT_FIELD
        violations.append(FieldViolation(field=field, reason=item["msg"]))
    return violations


def _validate(model: Type[ModelT], record: Any) -> ValidationResult[ModelT]:
    try:
        value = model.model_validate(record)
    except ValidationError as e:
        violations = _violations_from(e)
        user_id = record.get("user_id") if isinstance(record, Mapping) else None
        logger.bind(schema=model.__name__).debug(
            f"{model.__name__} rejected",
            fields=[v.field for v in violations],
            user_id=mask_user_id(user_id) if isinstance(user_id, str) else None,
        )
        return ValidationResult[model](errors=violations)
    return ValidationResult[model](value=value)


def validate_task_input(record: Any) -> ValidationResult[TaskInput]:
    """Validate a new task as submitted by reception."""
    return _validate(TaskInput, record)


def validate_task_update(record: Any) -> ValidationResult[TaskUpdate]:
    """Validate a partial task update; an empty mapping is valid."""
    return _validate(TaskUpdate, record)


def validate_work_log(record: Any) -> ValidationResult[WorkLog]:
    """Validate a work log entry."""
    return _validate(WorkLog, record)


VALIDATORS = {
    "task": validate_task_input,
    "task_update": validate_task_update,
    "work_log": validate_work_log,
}
