"""Supabase client wrapper with async context manager support."""

import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.errors import SupabaseError, ReportFetchError
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None

TASK_REPORT_COLUMNS = """
    id,
    date,
    status,
    cleaning_type,
    time_limit,
    actual_time,
    difference,
    room_id,
    created_at,
    room:rooms!inner(id, name, group_type),
    user:users(id, name, first_name, last_name)
"""

ISSUE_REPORT_COLUMNS = """
    id,
    room_id,
    status,
    priority,
    reported_at,
    resolved_at,
    reported_by_user_id,
    resolved_by_user_id,
    room:rooms!inner(id, name, group_type)
"""

WORK_LOG_REPORT_COLUMNS = """
    id,
    user_id,
    date,
    total_minutes,
    break_minutes,
    breakfast_minutes,
    laundry_minutes,
    user:users!inner(id, name, first_name, last_name)
"""


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        # Server-side reads only; no user session to keep
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


async def close_supabase_client() -> None:
    """Drop the client singleton."""
    global _client
    if _client:
        _client = None
        logger.info("Supabase client closed")


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


# Report reads
async def select_tasks_in_range(date_from: str, date_to: str) -> list[dict]:
    """Tasks dated within [date_from, date_to], newest first, with room and user joined."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("tasks")
                .select(TASK_REPORT_COLUMNS)
                .gte("date", date_from)
                .lte("date", date_to)
                .order("date", desc=True)
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise ReportFetchError(f"Failed to fetch tasks: {e}")


async def select_issues_in_range(reported_from: str, reported_to: str) -> list[dict]:
    """Issues reported between two ISO timestamps, newest first, with room joined."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("issues")
                .select(ISSUE_REPORT_COLUMNS)
                .gte("reported_at", reported_from)
                .lte("reported_at", reported_to)
                .order("reported_at", desc=True)
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise ReportFetchError(f"Failed to fetch issues: {e}")


async def select_work_logs_in_range(date_from: str, date_to: str) -> list[dict]:
    """Work logs dated within [date_from, date_to], newest first, with user joined."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("work_logs")
                .select(WORK_LOG_REPORT_COLUMNS)
                .gte("date", date_from)
                .lte("date", date_to)
                .order("date", desc=True)
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise ReportFetchError(f"Failed to fetch work logs: {e}")


async def select_active_rooms() -> list[dict]:
    """Active rooms ordered by name."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table("rooms")
                .select("id, name, group_type")
                .eq("active", True)
                .order("name")
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise ReportFetchError(f"Failed to fetch rooms: {e}")
