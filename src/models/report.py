"""Report models - records fetched for the admin reports view and the numbers derived from them."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskReportData(BaseModel):
    """Task row as read back for reporting."""
    id: str = ""
    date: str = ""
    status: str = Field(..., description="Status: todo, in_progress, paused, done, repair_needed")
    cleaning_type: Optional[str] = None
    time_limit: Optional[int] = Field(None, description="Time limit in minutes")
    actual_time: Optional[int] = Field(None, description="Actual duration in minutes")
    difference: Optional[int] = Field(None, description="actual_time - time_limit in minutes")
    room_id: str = ""
    room_name: str = ""
    room_group: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    created_at: Optional[str] = None


class IssueReportData(BaseModel):
    """Issue row as read back for reporting."""
    id: str = ""
    room_id: str = ""
    room_name: str = ""
    room_group: Optional[str] = None
    status: str = Field(..., description="Status: open, in_progress, resolved, closed, reported")
    priority: Optional[str] = None
    reported_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    reported_by_user_id: Optional[str] = None
    resolved_by_user_id: Optional[str] = None


class WorkLogReportData(BaseModel):
    """Work log row as read back for reporting."""
    id: str = ""
    user_id: str = ""
    user_name: str = ""
    date: str = ""
    total_minutes: Optional[int] = None
    break_minutes: Optional[int] = None
    breakfast_minutes: Optional[int] = None
    laundry_minutes: Optional[int] = None


class RoomReportData(BaseModel):
    """Active room."""
    id: str
    name: str
    group_type: Optional[str] = None


class ReportData(BaseModel):
    """The four collections a report is built from."""
    tasks: list[TaskReportData] = Field(default_factory=list)
    issues: list[IssueReportData] = Field(default_factory=list)
    work_logs: list[WorkLogReportData] = Field(default_factory=list)
    rooms: list[RoomReportData] = Field(default_factory=list)


class _ReportOutput(BaseModel):
    """Base for derived report values; serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Metrics(_ReportOutput):
    """Headline indicators."""
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: int = 0
    unresolved_issues: int = 0
    total_issues: int = 0
    total_hours_worked: float = 0.0
    work_log_count: int = 0
    on_time_tasks: int = 0
    on_time_rate: int = 0
    average_task_duration: int = 0


class CountRow(_ReportOutput):
    key: str
    count: int


class BucketRow(_ReportOutput):
    label: str
    count: int


class DailyVolumeRow(_ReportOutput):
    date: str
    created: int
    completed: int


class StaffProductivityRow(_ReportOutput):
    user_id: str
    name: str
    tasks: int
    completed: int


class StaffHoursRow(_ReportOutput):
    user_id: str
    name: str
    hours: float
    break_hours: float


class StaffEfficiencyRow(_ReportOutput):
    user_id: str
    name: str
    tasks_per_hour: float


class DailyIssueRow(_ReportOutput):
    date: str
    reported: int
    resolved: int


class HoursRow(_ReportOutput):
    label: str
    hours: float


class RoomCountRow(_ReportOutput):
    room_id: str
    name: str
    count: int


class RoomGroupPerformanceRow(_ReportOutput):
    room_group: str
    tasks: int
    issues: int
    average_duration: int


class Report(_ReportOutput):
    """Everything the admin reports view renders.

    `issue_status_filter` is the status the issue breakdowns were narrowed to, None for all.
    """
    metrics: Metrics
    issue_status_filter: Optional[str] = None
    task_status: list[CountRow] = Field(default_factory=list)
    cleaning_types: list[CountRow] = Field(default_factory=list)
    task_room_groups: list[CountRow] = Field(default_factory=list)
    time_efficiency: list[BucketRow] = Field(default_factory=list)
    daily_volume: list[DailyVolumeRow] = Field(default_factory=list)
    issue_status: list[CountRow] = Field(default_factory=list)
    issue_priority: list[CountRow] = Field(default_factory=list)
    issue_room_groups: list[CountRow] = Field(default_factory=list)
    resolution_times: list[BucketRow] = Field(default_factory=list)
    daily_issues: list[DailyIssueRow] = Field(default_factory=list)
    staff_productivity: list[StaffProductivityRow] = Field(default_factory=list)
    staff_hours: list[StaffHoursRow] = Field(default_factory=list)
    staff_efficiency: list[StaffEfficiencyRow] = Field(default_factory=list)
    break_time: list[HoursRow] = Field(default_factory=list)
    tasks_per_room: list[RoomCountRow] = Field(default_factory=list)
    issues_per_room: list[RoomCountRow] = Field(default_factory=list)
    room_utilization: list[BucketRow] = Field(default_factory=list)
    room_group_performance: list[RoomGroupPerformanceRow] = Field(default_factory=list)
