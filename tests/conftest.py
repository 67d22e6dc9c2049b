"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("REPORT_DEFAULT_RANGE_DAYS", "30")


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client whose queries chain and return `rows` per table."""
    client = MagicMock()
    tables = {}

    def table(name):
        if name not in tables:
            query = MagicMock()
            for method in ("select", "gte", "lte", "eq", "order"):
                getattr(query, method).return_value = query
            query.execute.return_value = MagicMock(data=[])
            tables[name] = query
        return tables[name]

    client.table.side_effect = table
    client.tables = tables
    return client


@pytest.fixture
def valid_task_input():
    """Task payload with every field at an accepted value."""
    return {
        "cleaning_type": "W",
        "guest_count": 2,
        "reception_notes": "Late checkout",
        "housekeeping_notes": "",
        "issue_description": "",
        "date": "2024-12-09",
        "room_id": "6f1c2d3e-4b5a-4c7d-8e9f-0a1b2c3d4e5f",
    }


@pytest.fixture
def valid_work_log():
    """Work log payload with every field at an accepted value."""
    return {
        "user_id": "0b7e8f4a-2c1d-4e3f-9a8b-7c6d5e4f3a2b",
        "date": "2024-12-09",
        "time_in": "07:00",
        "time_out": "15:30",
        "break_minutes": 30,
        "laundry_minutes": 45,
        "breakfast_minutes": 60,
        "total_minutes": 480,
        "notes": "",
    }


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
