"""Headline report metrics.

Pure reduction of the task, issue and work log collections into the
indicators shown on the admin reports view. Accepts report models or raw
row mappings, never mutates its inputs, and is total: empty collections
produce zeros, never an error or NaN.
"""

import math
from collections.abc import Mapping
from typing import Any, Iterable

from src.models.issue import TERMINAL_ISSUE_STATUSES
from src.models.report import Metrics
from src.models.task import TaskStatus


def field_of(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a report model or a plain row mapping."""
    if isinstance(record, Mapping):
        value = record.get(name, default)
    else:
        value = getattr(record, name, default)
    return default if value is None else value


def round_half_up(value: float, digits: int = 0):
    """Round halves up, so 2.5 becomes 3 and -2.5 becomes -2.

    Returns an int when digits is 0.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5)
    if digits == 0:
        return int(rounded)
    return rounded / factor


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def minutes_to_hours(minutes: int) -> float:
    """Minutes as hours rounded to one decimal."""
    return round_half_up(minutes / 60, 1)


def is_done(task: Any) -> bool:
    return field_of(task, "status") == TaskStatus.DONE.value


def is_timed(task: Any) -> bool:
    """Done with both an actual time and a time limit recorded."""
    # Zero counts as missing, matching how durations are captured
    return is_done(task) and bool(field_of(task, "actual_time")) and bool(field_of(task, "time_limit"))


def is_unresolved(issue: Any) -> bool:
    return field_of(issue, "status") not in TERMINAL_ISSUE_STATUSES


def total_minutes(work_logs: Iterable[Any], name: str = "total_minutes") -> int:
    """Sum a minutes field, missing values counting as 0."""
    return sum(field_of(log, name, 0) for log in work_logs)


def average_minutes(values: list[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def compute_metrics(
    tasks: Iterable[Any],
    issues: Iterable[Any],
    work_logs: Iterable[Any],
) -> Metrics:
    """Reduce the three collections into the headline indicators.

    The on-time rate and average duration only consider timed tasks; a done
    task without timing data is left out of both numerator and denominator.
    """
    tasks = list(tasks)
    issues = list(issues)
    work_logs = list(work_logs)

    completed = sum(1 for t in tasks if is_done(t))
    timed_tasks = [t for t in tasks if is_timed(t)]
    on_time = sum(
        1 for t in timed_tasks
        if field_of(t, "actual_time") <= field_of(t, "time_limit")
    )

    return Metrics(
        total_tasks=len(tasks),
        completed_tasks=completed,
        completion_rate=percentage(completed, len(tasks)),
        unresolved_issues=sum(1 for i in issues if is_unresolved(i)),
        total_issues=len(issues),
        total_hours_worked=minutes_to_hours(total_minutes(work_logs)),
        work_log_count=len(work_logs),
        on_time_tasks=on_time,
        on_time_rate=percentage(on_time, len(timed_tasks)),
        average_task_duration=average_minutes([field_of(t, "actual_time") for t in timed_tasks]),
    )
