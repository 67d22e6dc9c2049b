"""Test data factories using Faker."""

from faker import Faker
from typing import Optional

from src.models.issue import IssuePriority, IssueStatus
from src.models.room import RoomGroup
from src.models.task import CleaningType, TaskStatus

fake = Faker()


def create_task_input_data(**overrides) -> dict:
    """Create a task payload that passes validation."""
    data = {
        "cleaning_type": fake.random_element([c.value for c in CleaningType]),
        "guest_count": fake.random_int(min=1, max=20),
        "reception_notes": fake.sentence(),
        "housekeeping_notes": "",
        "issue_description": "",
        "date": fake.date(pattern="%Y-%m-%d"),
        "room_id": fake.uuid4(),
    }
    data.update(overrides)
    return data


def create_work_log_data(**overrides) -> dict:
    """Create a work log payload that passes validation."""
    data = {
        "user_id": fake.uuid4(),
        "date": fake.date(pattern="%Y-%m-%d"),
        "time_in": "07:00",
        "time_out": "15:00",
        "break_minutes": fake.random_int(min=0, max=60),
        "laundry_minutes": fake.random_int(min=0, max=60),
        "breakfast_minutes": fake.random_int(min=0, max=60),
        "total_minutes": fake.random_int(min=0, max=480),
    }
    data.update(overrides)
    return data


def create_task_report(
    status: str = TaskStatus.TODO.value,
    actual_time: Optional[int] = None,
    time_limit: Optional[int] = None,
    **overrides,
) -> dict:
    """Create a task report row."""
    difference = actual_time - time_limit if actual_time is not None and time_limit is not None else None
    data = {
        "id": fake.uuid4(),
        "date": fake.date(pattern="%Y-%m-%d"),
        "status": status,
        "cleaning_type": fake.random_element([c.value for c in CleaningType]),
        "time_limit": time_limit,
        "actual_time": actual_time,
        "difference": difference,
        "room_id": fake.uuid4(),
        "room_name": str(fake.random_int(min=100, max=399)),
        "room_group": fake.random_element([g.value for g in RoomGroup]),
        "user_id": None,
        "user_name": None,
        "created_at": None,
    }
    data.update(overrides)
    return data


def create_issue_report(status: str = IssueStatus.OPEN.value, **overrides) -> dict:
    """Create an issue report row."""
    data = {
        "id": fake.uuid4(),
        "room_id": fake.uuid4(),
        "room_name": str(fake.random_int(min=100, max=399)),
        "room_group": fake.random_element([g.value for g in RoomGroup]),
        "status": status,
        "priority": fake.random_element([p.value for p in IssuePriority]),
        "reported_at": "2024-12-01T08:00:00+00:00",
        "resolved_at": None,
        "reported_by_user_id": None,
        "resolved_by_user_id": None,
    }
    data.update(overrides)
    return data


def create_work_log_report(total_minutes: Optional[int] = None, **overrides) -> dict:
    """Create a work log report row."""
    data = {
        "id": fake.uuid4(),
        "user_id": fake.uuid4(),
        "user_name": fake.name(),
        "date": fake.date(pattern="%Y-%m-%d"),
        "total_minutes": total_minutes,
        "break_minutes": None,
        "breakfast_minutes": None,
        "laundry_minutes": None,
    }
    data.update(overrides)
    return data
