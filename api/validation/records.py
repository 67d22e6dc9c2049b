"""Record validation endpoint: reports every field violation for a candidate task or work log."""

import json

from src.services.validation import VALIDATORS
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
    Validate a record.

    Query param `kind` selects the schema: task, task_update or work_log.
    """
    with correlation_context(request_correlation_id(request)):
        query_params = request.get("query", {}) or {}
        kind = query_params.get("kind", "task")
        validate = VALIDATORS.get(kind)
        if validate is None:
            return _response(400, {"error": f"Unknown record kind: {kind}"})

        body = request.get("body")
        if isinstance(body, (str, bytes)):
            try:
                body = json.loads(body or "{}")
            except ValueError as e:
                logger.warning("Unparsable validation body", kind=kind, error=str(e))
                return _response(400, {"error": "Request body is not valid JSON"})

        result = validate(body)
        if not result.ok:
            return _response(422, {
                "valid": False,
                "errors": [violation.model_dump() for violation in result.errors],
            })

        return _response(200, {
            "valid": True,
            "record": result.value.model_dump(mode="json", exclude_unset=True),
        })
