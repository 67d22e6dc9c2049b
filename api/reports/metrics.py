"""Admin reports endpoint: fetch the report window and return metrics plus breakdowns."""

import asyncio
import json

from src.services.breakdowns import build_report
from src.services.report_fetcher import fetch_report_data, parse_date_range, parse_issue_status
from src.utils.errors import HousekeepingError, InvalidDateRangeError, InvalidReportFilterError
from src.utils.logging import (
    correlation_context,
    get_correlation_id,
    get_structured_logger,
    request_correlation_id,
    setup_logging,
)
from src.utils.logging_config import LoggingConfig

setup_logging()
logger = get_structured_logger(__name__)


def _response(status_code: int, payload: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            LoggingConfig.LOG_CORRELATION_ID_HEADER: get_correlation_id(),
        },
        "body": json.dumps(payload)
    }


def handler(request):
    """
    Build the admin report.

    Query params `from` and `to` (YYYY-MM-DD) bound the window; either may
    be omitted to fall back to the default window ending today.
    `issue_status` narrows the issue breakdowns (default `reported`, `all`
    for every status).
    """
    with correlation_context(request_correlation_id(request)):
        query_params = request.get("query", {}) or {}
        try:
            date_from, date_to = parse_date_range(query_params.get("from"), query_params.get("to"))
            issue_status = parse_issue_status(query_params.get("issue_status"))
        except (InvalidDateRangeError, InvalidReportFilterError) as e:
            logger.warning("Rejected report query", error=str(e))
            return _response(400, {"error": str(e)})

        try:
            data = asyncio.run(fetch_report_data(date_from, date_to))
        except HousekeepingError as e:
            logger.error(f"Error fetching report data: {e}", exc_info=True)
            return _response(500, {"error": "Failed to fetch report data"})

        report = build_report(data.tasks, data.issues, data.work_logs, data.rooms, issue_status=issue_status)
        return _response(200, {
            "ok": True,
            "from": date_from.isoformat(),
            "to": date_to.isoformat(),
            "issueStatus": issue_status or "all",
            "report": report.model_dump(mode="json", by_alias=True),
        })
