"""Tests for the record validation endpoint."""

import json
import pytest
from api.validation.records import handler
from tests.utils.assertions import assert_valid_response


@pytest.mark.unit
def test_validation_handler_accepts_task(valid_task_input):
    """Test an accepted task."""
    response = handler({"query": {"kind": "task"}, "body": json.dumps(valid_task_input)})

    body = assert_valid_response(response, 200)
    assert body["valid"] is True
    assert body["record"]["cleaning_type"] == "W"


@pytest.mark.unit
def test_validation_handler_reports_every_violation(valid_task_input):
    """Test that all violations are returned together."""
    record = {**valid_task_input, "guest_count": 0, "cleaning_type": "X"}

    response = handler({"query": {"kind": "task"}, "body": json.dumps(record)})

    body = assert_valid_response(response, 422)
    assert body["valid"] is False
    assert {error["field"] for error in body["errors"]} == {"guest_count", "cleaning_type"}
    assert all(error["reason"] for error in body["errors"])


@pytest.mark.unit
def test_validation_handler_partial_update():
    """Test that the echoed update only carries supplied fields."""
    response = handler({"query": {"kind": "task_update"}, "body": {"guest_count": 4}})

    body = assert_valid_response(response, 200)
    assert body["record"] == {"guest_count": 4}


@pytest.mark.unit
def test_validation_handler_work_log(valid_work_log):
    """Test work log validation through the endpoint."""
    response = handler({"query": {"kind": "work_log"}, "body": {**valid_work_log, "total_minutes": 961}})

    body = assert_valid_response(response, 422)
    assert [error["field"] for error in body["errors"]] == ["total_minutes"]


@pytest.mark.unit
def test_validation_handler_unknown_kind():
    """Test an unknown record kind."""
    response = handler({"query": {"kind": "room"}, "body": "{}"})

    assert_valid_response(response, 400)


@pytest.mark.unit
def test_validation_handler_invalid_json():
    """Test an unparsable body."""
    response = handler({"query": {"kind": "task"}, "body": "{not json"})

    body = assert_valid_response(response, 400)
    assert body["error"] == "Request body is not valid JSON"


@pytest.mark.unit
def test_validation_handler_echoes_correlation_id(valid_task_input):
    """Test that the caller's correlation id is returned on the response."""
    response = handler({
        "query": {"kind": "task"},
        "headers": {"x-correlation-id": "req_client_1"},
        "body": valid_task_input,
    })

    assert response["headers"]["X-Correlation-ID"] == "req_client_1"


@pytest.mark.unit
def test_validation_handler_undecodable_body():
    """Test that a body that is not valid text is a bad request."""
    response = handler({"query": {"kind": "task"}, "body": b"\xff\xfe{"})

    body = assert_valid_response(response, 400)
    assert body["error"] == "Request body is not valid JSON"
