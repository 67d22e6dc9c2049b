"""Report data fetching - reads the report collections for a date range and flattens joined rows."""

import os
from datetime import date, datetime, time, timedelta
from typing import Optional

from src.models.report import (
    IssueReportData,
    ReportData,
    RoomReportData,
    TaskReportData,
    WorkLogReportData,
)
from src.services.supabase_client import (
    select_active_rooms,
    select_issues_in_range,
    select_tasks_in_range,
    select_work_logs_in_range,
)
from src.models.issue import IssueStatus
from src.utils.errors import InvalidDateRangeError, InvalidReportFilterError
from src.utils.logging import get_structured_logger, timed

logger = get_structured_logger(__name__)

REPORT_DEFAULT_RANGE_DAYS = int(os.environ.get("REPORT_DEFAULT_RANGE_DAYS", "30"))

DEFAULT_ISSUE_STATUS = IssueStatus.REPORTED.value
ALL_ISSUE_STATUSES = "all"


def default_date_range(today: Optional[date] = None) -> tuple[date, date]:
    """The default report window, ending today."""
    end = today or date.today()
    return end - timedelta(days=REPORT_DEFAULT_RANGE_DAYS), end


def parse_date_range(date_from: Optional[str], date_to: Optional[str]) -> tuple[date, date]:
    """Parse a report window from YYYY-MM-DD strings, filling gaps from the default window."""
    default_from, default_to = default_date_range()
    try:
        start = date.fromisoformat(date_from) if date_from else default_from
        end = date.fromisoformat(date_to) if date_to else default_to
    except ValueError as e:
        raise InvalidDateRangeError(f"Invalid report date: {e}")

    if start > end:
        raise InvalidDateRangeError(f"Report range starts after it ends: {start} > {end}")
    return start, end


def parse_issue_status(value: Optional[str]) -> Optional[str]:
    """Status the issue breakdowns are narrowed to; None means every status.

    Defaults to reported issues when no value is given.
    """
    if not value:
        return DEFAULT_ISSUE_STATUS
    if value == ALL_ISSUE_STATUSES:
        return None
    if value not in {status.value for status in IssueStatus}:
        raise InvalidReportFilterError(f"Unknown issue status filter: {value}")
    return value


def _user_display_name(user: Optional[dict]) -> Optional[str]:
    """'First Last' when both are known, else the account name."""
    if not user:
        return None
    first_name = user.get("first_name")
    last_name = user.get("last_name")
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return user.get("name") or None


def task_from_row(row: dict) -> TaskReportData:
    room = row.get("room") or {}
    user = row.get("user") or {}
    return TaskReportData(
        id=row["id"],
        date=row.get("date") or "",
        status=row["status"],
        cleaning_type=row.get("cleaning_type"),
        time_limit=row.get("time_limit"),
        actual_time=row.get("actual_time"),
        difference=row.get("difference"),
        room_id=room.get("id") or "",
        room_name=room.get("name") or "",
        room_group=room.get("group_type"),
        user_id=user.get("id") or None,
        user_name=_user_display_name(user),
        created_at=row.get("created_at"),
    )


def issue_from_row(row: dict) -> IssueReportData:
    room = row.get("room") or {}
    return IssueReportData(
        id=row["id"],
        room_id=room.get("id") or "",
        room_name=room.get("name") or "",
        room_group=room.get("group_type"),
        status=row["status"],
        priority=row.get("priority"),
        reported_at=row.get("reported_at"),
        resolved_at=row.get("resolved_at"),
        reported_by_user_id=row.get("reported_by_user_id"),
        resolved_by_user_id=row.get("resolved_by_user_id"),
    )


def work_log_from_row(row: dict) -> WorkLogReportData:
    return WorkLogReportData(
        id=row["id"],
        user_id=row["user_id"],
        user_name=_user_display_name(row.get("user")) or "",
        date=row.get("date") or "",
        total_minutes=row.get("total_minutes"),
        break_minutes=row.get("break_minutes"),
        breakfast_minutes=row.get("breakfast_minutes"),
        laundry_minutes=row.get("laundry_minutes"),
    )


def room_from_row(row: dict) -> RoomReportData:
    return RoomReportData(id=row["id"], name=row["name"], group_type=row.get("group_type"))


@timed("fetch_report_data")
async def fetch_report_data(date_from: date, date_to: date) -> ReportData:
    """Read tasks, issues, work logs and active rooms for a date window.

    Issues are selected by report timestamp from the start of `date_from`
    through the end of `date_to`. The reads go out one after another on the
    shared synchronous client.
    """
    issues_from = datetime.combine(date_from, time.min).isoformat()
    issues_to = datetime.combine(date_to, time.max).isoformat()

    task_rows = await select_tasks_in_range(date_from.isoformat(), date_to.isoformat())
    issue_rows = await select_issues_in_range(issues_from, issues_to)
    work_log_rows = await select_work_logs_in_range(date_from.isoformat(), date_to.isoformat())
    room_rows = await select_active_rooms()

    data = ReportData(
        tasks=[task_from_row(row) for row in task_rows],
        issues=[issue_from_row(row) for row in issue_rows],
        work_logs=[work_log_from_row(row) for row in work_log_rows],
        rooms=[room_from_row(row) for row in room_rows],
    )
    logger.info(
        "Report data fetched",
        date_from=date_from.isoformat(),
        date_to=date_to.isoformat(),
        tasks=len(data.tasks),
        issues=len(data.issues),
        work_logs=len(data.work_logs),
        rooms=len(data.rooms),
    )
    return data
