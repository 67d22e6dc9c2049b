"""Report breakdowns - per-dimension distributions behind the report charts.

All functions are pure. Ties are broken by key so the output does not
depend on the order the rows were fetched in.
"""

from collections import Counter, defaultdict
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from src.models.report import (
    BucketRow,
    CountRow,
    DailyIssueRow,
    DailyVolumeRow,
    HoursRow,
    Report,
    RoomCountRow,
    RoomGroupPerformanceRow,
    StaffEfficiencyRow,
    StaffHoursRow,
    StaffProductivityRow,
)
from src.models.room import RoomGroup
from src.services.metrics import (
    average_minutes,
    compute_metrics,
    field_of,
    is_done,
    is_timed,
    minutes_to_hours,
    round_half_up,
    total_minutes,
)
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

STAFF_LIMIT = 10
ROOM_LIMIT = 15
DAILY_VOLUME_DAYS = 14
DAILY_ISSUE_DAYS = 14

# (label, lower bound inclusive, upper bound exclusive) in minutes over the limit
TIME_EFFICIENCY_BUCKETS = (
    ("ahead", float("-inf"), -10),
    ("on_time", -10, 0),
    ("over", 0, 30),
    ("far_over", 30, float("inf")),
)

# Hours from report to resolution
RESOLUTION_BUCKETS = (
    ("<1h", float("-inf"), 1),
    ("1-4h", 1, 4),
    ("4-24h", 4, 24),
    ("1-3d", 24, 72),
    (">3d", 72, float("inf")),
)

# Tasks per room; rooms without tasks are counted separately
ROOM_UTILIZATION_BUCKETS = (
    ("1-5", 1, 6),
    ("6-10", 6, 11),
    ("11-20", 11, 21),
    (">20", 21, float("inf")),
)
IDLE_ROOMS_LABEL = "0"

BREAK_CATEGORIES = (
    ("break", "break_minutes"),
    ("breakfast", "breakfast_minutes"),
    ("laundry", "laundry_minutes"),
)

_ROOM_GROUP_ORDER = {group.value: index for index, group in enumerate(RoomGroup)}


def _count_rows(values: Iterable[Optional[str]]) -> list[CountRow]:
    counts = Counter(value for value in values if value)
    return [
        CountRow(key=key, count=count)
        for key, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]


def _bucket_rows(values: Iterable[float], buckets) -> list[BucketRow]:
    counts = Counter()
    for value in values:
        for label, low, high in buckets:
            if low <= value < high:
                counts[label] += 1
                break
    return [BucketRow(label=label, count=counts[label]) for label, _, _ in buckets if counts[label]]


def _filter_status(issues: Iterable[Any], status: Optional[str]) -> list[Any]:
    if status is None:
        return list(issues)
    return [issue for issue in issues if field_of(issue, "status") == status]


_TIMESTAMP = TypeAdapter(datetime)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp or datetime; naive values are taken as UTC, unparsable ones as missing."""
    if not value:
        return None
    try:
        parsed = _TIMESTAMP.validate_python(value)
    except ValidationError:
        logger.debug("Skipping unparsable timestamp", value=str(value))
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# Tasks

def task_status_distribution(tasks: Iterable[Any]) -> list[CountRow]:
    return _count_rows(field_of(t, "status") for t in tasks)


def cleaning_type_distribution(tasks: Iterable[Any]) -> list[CountRow]:
    return _count_rows(field_of(t, "cleaning_type") for t in tasks)


def task_room_group_distribution(tasks: Iterable[Any]) -> list[CountRow]:
    return _count_rows(field_of(t, "room_group") for t in tasks)


def time_efficiency_buckets(tasks: Iterable[Any]) -> list[BucketRow]:
    """Bucket timed tasks by how far actual time landed from the limit."""
    return _bucket_rows(
        (field_of(t, "difference", 0) for t in tasks if is_timed(t)),
        TIME_EFFICIENCY_BUCKETS,
    )


def daily_task_volume(tasks: Iterable[Any], days: int = DAILY_VOLUME_DAYS) -> list[DailyVolumeRow]:
    """Tasks created and completed per day, oldest first, last `days` days with tasks."""
    created = Counter()
    completed = Counter()
    for task in tasks:
        day = field_of(task, "date")
        if not day:
            continue
        created[day] += 1
        if is_done(task):
            completed[day] += 1

    rows = [
        DailyVolumeRow(date=day, created=created[day], completed=completed[day])
        for day in sorted(created)
    ]
    return rows[-days:] if days > 0 else []


# Issues

def issue_status_distribution(issues: Iterable[Any], status: Optional[str] = None) -> list[CountRow]:
    return _count_rows(field_of(i, "status") for i in _filter_status(issues, status))


def issue_priority_distribution(issues: Iterable[Any], status: Optional[str] = None) -> list[CountRow]:
    return _count_rows(field_of(i, "priority") for i in _filter_status(issues, status))


def issue_room_group_distribution(issues: Iterable[Any], status: Optional[str] = None) -> list[CountRow]:
    return _count_rows(field_of(i, "room_group") for i in _filter_status(issues, status))


def resolution_time_buckets(issues: Iterable[Any], status: Optional[str] = None) -> list[BucketRow]:
    """Bucket resolved issues by hours between report and resolution."""
    hours = []
    for issue in _filter_status(issues, status):
        reported_at = _parse_timestamp(field_of(issue, "reported_at"))
        resolved_at = _parse_timestamp(field_of(issue, "resolved_at"))
        if reported_at is None or resolved_at is None:
            continue
        hours.append((resolved_at - reported_at).total_seconds() / 3600)
    return _bucket_rows(hours, RESOLUTION_BUCKETS)


def daily_issue_trends(
    issues: Iterable[Any],
    status: Optional[str] = None,
    days: int = DAILY_ISSUE_DAYS,
) -> list[DailyIssueRow]:
    """Issues reported and resolved per calendar day, oldest first, last `days` days with activity.

    Days are taken in each timestamp's own offset.
    """
    reported = Counter()
    resolved = Counter()
    for issue in _filter_status(issues, status):
        reported_at = _parse_timestamp(field_of(issue, "reported_at"))
        if reported_at is None:
            continue
        reported[reported_at.date().isoformat()] += 1
        resolved_at = _parse_timestamp(field_of(issue, "resolved_at"))
        if resolved_at is not None:
            resolved[resolved_at.date().isoformat()] += 1

    rows = [
        DailyIssueRow(date=day, reported=reported[day], resolved=resolved[day])
        for day in sorted(set(reported) | set(resolved))
    ]
    return rows[-days:] if days > 0 else []


# Staff

def staff_productivity(tasks: Iterable[Any], limit: int = STAFF_LIMIT) -> list[StaffProductivityRow]:
    """Assigned and completed task counts per staff member, most completed first."""
    names = {}
    assigned = Counter()
    completed = Counter()
    for task in tasks:
        user_id = field_of(task, "user_id")
        name = field_of(task, "user_name")
        if not user_id or not name:
            continue
        names.setdefault(user_id, name)
        assigned[user_id] += 1
        if is_done(task):
            completed[user_id] += 1

    rows = [
        StaffProductivityRow(user_id=user_id, name=names[user_id], tasks=assigned[user_id], completed=completed[user_id])
        for user_id in assigned
    ]
    rows.sort(key=lambda row: (-row.completed, -row.tasks, row.name, row.user_id))
    return rows[:limit]


def _minutes_by_user(work_logs: Iterable[Any]) -> tuple[dict, dict, dict]:
    names = {}
    worked = defaultdict(int)
    breaks = defaultdict(int)
    for log in work_logs:
        user_id = field_of(log, "user_id")
        if not user_id:
            continue
        names.setdefault(user_id, field_of(log, "user_name", ""))
        worked[user_id] += field_of(log, "total_minutes", 0)
        breaks[user_id] += sum(field_of(log, name, 0) for _, name in BREAK_CATEGORIES)
    return names, worked, breaks


def staff_hours(work_logs: Iterable[Any], limit: int = STAFF_LIMIT) -> list[StaffHoursRow]:
    """Worked and break hours per staff member, most worked first."""
    names, worked, breaks = _minutes_by_user(work_logs)
    rows = [
        StaffHoursRow(
            user_id=user_id,
            name=names[user_id],
            hours=minutes_to_hours(worked[user_id]),
            break_hours=minutes_to_hours(breaks[user_id]),
        )
        for user_id in names
    ]
    rows.sort(key=lambda row: (-row.hours, row.name, row.user_id))
    return rows[:limit]


def staff_efficiency(
    tasks: Iterable[Any],
    work_logs: Iterable[Any],
    limit: int = STAFF_LIMIT,
) -> list[StaffEfficiencyRow]:
    """Completed tasks per worked hour; staff without logged hours are left out."""
    names = {}
    completed = Counter()
    for task in tasks:
        user_id = field_of(task, "user_id")
        name = field_of(task, "user_name")
        if user_id and name and is_done(task):
            names.setdefault(user_id, name)
            completed[user_id] += 1

    _, worked, _ = _minutes_by_user(work_logs)

    rows = []
    for user_id, count in completed.items():
        minutes = worked.get(user_id, 0)
        if minutes <= 0:
            continue
        rows.append(StaffEfficiencyRow(
            user_id=user_id,
            name=names[user_id],
            tasks_per_hour=round_half_up(count / (minutes / 60), 2),
        ))
    rows.sort(key=lambda row: (-row.tasks_per_hour, row.name, row.user_id))
    return rows[:limit]


def break_time_breakdown(work_logs: Iterable[Any]) -> list[HoursRow]:
    """Total break, breakfast and laundry hours; empty categories dropped."""
    work_logs = list(work_logs)
    rows = [
        HoursRow(label=label, hours=minutes_to_hours(total_minutes(work_logs, name)))
        for label, name in BREAK_CATEGORIES
    ]
    return [row for row in rows if row.hours > 0]


# Rooms

def _per_room(records: Iterable[Any], rooms: Iterable[Any], limit: int) -> list[RoomCountRow]:
    room_names = {field_of(room, "id"): field_of(room, "name") for room in rooms}
    counts = Counter(field_of(record, "room_id") for record in records if field_of(record, "room_id"))
    rows = [
        RoomCountRow(room_id=room_id, name=room_names.get(room_id) or room_id, count=count)
        for room_id, count in counts.items()
    ]
    rows.sort(key=lambda row: (-row.count, row.name, row.room_id))
    return rows[:limit]


def tasks_per_room(tasks: Iterable[Any], rooms: Iterable[Any], limit: int = ROOM_LIMIT) -> list[RoomCountRow]:
    return _per_room(tasks, rooms, limit)


def issues_per_room(issues: Iterable[Any], rooms: Iterable[Any], limit: int = ROOM_LIMIT) -> list[RoomCountRow]:
    return _per_room(issues, rooms, limit)


def room_utilization(tasks: Iterable[Any], rooms: Iterable[Any]) -> list[BucketRow]:
    """Rooms bucketed by task count; the "0" bucket is active rooms that had no task."""
    counts = Counter(field_of(t, "room_id") for t in tasks if field_of(t, "room_id"))
    idle = len(list(rooms)) - len(counts)

    rows = []
    if idle > 0:
        rows.append(BucketRow(label=IDLE_ROOMS_LABEL, count=idle))
    return rows + _bucket_rows(counts.values(), ROOM_UTILIZATION_BUCKETS)


def room_group_performance(tasks: Iterable[Any], issues: Iterable[Any]) -> list[RoomGroupPerformanceRow]:
    """Task count, issue count and mean done duration per room group."""
    task_counts = Counter()
    issue_counts = Counter()
    durations = defaultdict(list)

    for task in tasks:
        group = field_of(task, "room_group")
        if not group:
            continue
        task_counts[group] += 1
        actual_time = field_of(task, "actual_time")
        if is_done(task) and actual_time:
            durations[group].append(actual_time)

    for issue in issues:
        group = field_of(issue, "room_group")
        if group:
            issue_counts[group] += 1

    groups = set(task_counts) | set(issue_counts)
    ordered = sorted(groups, key=lambda g: (_ROOM_GROUP_ORDER.get(g, len(_ROOM_GROUP_ORDER)), g))
    return [
        RoomGroupPerformanceRow(
            room_group=group,
            tasks=task_counts[group],
            issues=issue_counts[group],
            average_duration=average_minutes(durations[group]),
        )
        for group in ordered
    ]


def build_report(
    tasks: Iterable[Any],
    issues: Iterable[Any],
    work_logs: Iterable[Any],
    rooms: Iterable[Any] = (),
    issue_status: Optional[str] = None,
) -> Report:
    """Headline metrics plus every breakdown, from one snapshot of the collections.

    `issue_status` narrows the issue breakdowns to one status; the headline
    metrics always cover every issue.
    """
    tasks = list(tasks)
    issues = list(issues)
    work_logs = list(work_logs)
    rooms = list(rooms)

    with log_timing(
        "build_report",
        logger=logger,
        task_count=len(tasks),
        issue_count=len(issues),
        work_log_count=len(work_logs),
        issue_status=issue_status,
    ):
        return Report(
            metrics=compute_metrics(tasks, issues, work_logs),
            issue_status_filter=issue_status,
            task_status=task_status_distribution(tasks),
            cleaning_types=cleaning_type_distribution(tasks),
            task_room_groups=task_room_group_distribution(tasks),
            time_efficiency=time_efficiency_buckets(tasks),
            daily_volume=daily_task_volume(tasks),
            issue_status=issue_status_distribution(issues, issue_status),
            issue_priority=issue_priority_distribution(issues, issue_status),
            issue_room_groups=issue_room_group_distribution(issues, issue_status),
            resolution_times=resolution_time_buckets(issues, issue_status),
            daily_issues=daily_issue_trends(issues, issue_status),
            staff_productivity=staff_productivity(tasks),
            staff_hours=staff_hours(work_logs),
            staff_efficiency=staff_efficiency(tasks, work_logs),
            break_time=break_time_breakdown(work_logs),
            tasks_per_room=tasks_per_room(tasks, rooms),
            issues_per_room=issues_per_room(issues, rooms),
            room_utilization=room_utilization(tasks, rooms),
            room_group_performance=room_group_performance(tasks, issues),
        )
