"""Tests for structured logging utilities."""

import logging
import pytest
from src.utils.logging import (
    correlation_context,
    get_correlation_id,
    get_structured_logger,
    log_timing,
    mask_user_id,
    request_correlation_id,
    timed,
)


@pytest.mark.unit
def test_correlation_context_sets_and_restores():
    """Test correlation ID propagation and restoration."""
    assert get_correlation_id() is None

    with correlation_context() as outer:
        assert outer.startswith("req_")
        assert get_correlation_id() == outer
        with correlation_context("req_inner") as inner:
            assert get_correlation_id() == inner == "req_inner"
        assert get_correlation_id() == outer

    assert get_correlation_id() is None


@pytest.mark.unit
def test_structured_logger_attaches_correlation_id(caplog):
    """Test that records carry the correlation ID and custom fields."""
    logger = get_structured_logger("tests.logging")

    with caplog.at_level(logging.INFO, logger="tests.logging"):
        with correlation_context("req_abc"):
            logger.info("Report built", task_count=3)

    record = caplog.records[-1]
    assert record.correlation_id == "req_abc"
    assert record.task_count == 3
    assert record.timestamp


@pytest.mark.unit
def test_mask_user_id():
    """Test that long user IDs are masked and short ones left alone."""
    user_id = "0b7e8f4a-2c1d-4e3f-9a8b-7c6d5e4f3a2b"

    masked = mask_user_id(user_id)

    assert masked.startswith("0b7e...")
    assert user_id not in masked
    assert mask_user_id("u1") == "u1"
    assert mask_user_id(None) is None


@pytest.mark.unit
def test_timed_sync(caplog):
    """Test that timed functions log their duration."""
    @timed("add_numbers")
    def add(a, b):
        return a + b

    with caplog.at_level(logging.INFO):
        assert add(2, 3) == 5

    completed = [r for r in caplog.records if r.getMessage() == "Completed add_numbers"]
    assert completed
    assert completed[0].processing_time_ms >= 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timed_async(caplog):
    """Test that timed coroutines stay awaitable."""
    @timed()
    async def fetch():
        return "rows"

    with caplog.at_level(logging.INFO):
        assert await fetch() == "rows"

    assert any(r.getMessage().startswith("Completed ") for r in caplog.records)


@pytest.mark.unit
def test_request_correlation_id_reads_header_case_insensitively():
    assert request_correlation_id({"headers": {"x-correlation-id": "req_from_client"}}) == "req_from_client"
    assert request_correlation_id({"headers": {"X-Correlation-ID": ""}}) is None
    assert request_correlation_id({"query": {}}) is None


@pytest.mark.unit
def test_bound_fields_are_merged(caplog):
    """Test that bound fields appear on records and call fields override them."""
    logger = get_structured_logger("tests.logging").bind(schema="TaskInput", kind="task")

    with caplog.at_level(logging.INFO, logger="tests.logging"):
        logger.info("Validated", kind="task_update")

    record = caplog.records[-1]
    assert record.schema == "TaskInput"
    assert record.kind == "task_update"


@pytest.mark.unit
def test_log_timing_logs_failure_and_reraises(caplog):
    """Test that a failing block is logged as failed, not completed."""
    logger = get_structured_logger("tests.logging")

    with caplog.at_level(logging.INFO, logger="tests.logging"):
        with pytest.raises(ValueError):
            with log_timing("build_report", logger=logger, task_count=2):
                raise ValueError("boom")

    messages = [r.getMessage() for r in caplog.records]
    assert "Failed build_report" in messages
    assert "Completed build_report" not in messages
    failed = next(r for r in caplog.records if r.getMessage() == "Failed build_report")
    assert failed.error_type == "ValueError"
    assert failed.task_count == 2
