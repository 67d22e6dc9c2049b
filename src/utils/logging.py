"""Structured logging for the housekeeping backend.

Every record carries a timestamp and, inside a request, the correlation id
taken from the caller's header (or generated). Staff user ids are masked
before they reach a log line.
"""

import logging
import time
import uuid
import hashlib
import inspect
from contextvars import ContextVar
from typing import Any, Optional, Dict, Callable, Mapping
from contextlib import contextmanager
from functools import wraps
from datetime import datetime, timezone

from src.utils.logging_config import LoggingConfig, get_logger


_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


def generate_correlation_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


def request_correlation_id(request: Mapping) -> Optional[str]:
    """Correlation id sent by the caller, matched case-insensitively on header name."""
    headers = request.get("headers") or {}
    wanted = LoggingConfig.LOG_CORRELATION_ID_HEADER.lower()
    for name, value in headers.items():
        if name.lower() == wanted and value:
            return value
    return None


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Bind a correlation id for the duration of the block, restoring the previous one."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    token = _correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id_var.reset(token)


def mask_user_id(user_id: Optional[str]) -> Optional[str]:
    """Mask a staff user id: a 4 character prefix plus a short hash."""
    if not LoggingConfig.LOG_MASK_SENSITIVE or not user_id:
        return user_id

    if len(user_id) > 12:
        hashed = hashlib.sha256(user_id.encode()).hexdigest()[:8]
        return f"{user_id[:4]}...{hashed}"
    return user_id


class StructuredLogger:
    """Logger wrapper that attaches structured fields to every record."""

    def __init__(self, logger: logging.Logger, **bound: Any):
        self.logger = logger
        self.bound = bound

    def bind(self, **fields: Any) -> "StructuredLogger":
        """A logger that adds `fields` to every record on top of the current ones."""
        return StructuredLogger(self.logger, **{**self.bound, **fields})

    def _get_extra(self, **kwargs: Any) -> Dict[str, Any]:
        extra = {"timestamp": datetime.now(timezone.utc).isoformat()}

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        extra.update(self.bound)
        extra.update(kwargs)
        return extra

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, extra=self._get_extra(**kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, extra=self._get_extra(**kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, extra=self._get_extra(**kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self.logger.error(message, extra=self._get_extra(**kwargs), exc_info=exc_info)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """Time the block; log its outcome, and warn when it crosses the slow threshold.

    Exceptions are logged as a failed operation and re-raised.
    """
    log = (logger or get_structured_logger(__name__)).bind(operation=operation_name, **context)

    start_time = time.perf_counter()
    log.debug(f"Starting {operation_name}")
    outcome = "ok"
    try:
        yield
    except Exception as e:
        outcome = "error"
        log.warning(f"Failed {operation_name}", error_type=type(e).__name__)
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        if outcome == "ok":
            log.info(f"Completed {operation_name}", processing_time_ms=elapsed_ms, outcome=outcome)

        if elapsed_ms > LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS:
            log.warning(
                f"Slow operation detected: {operation_name}",
                processing_time_ms=elapsed_ms,
                threshold_ms=LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS,
                outcome=outcome,
            )


def timed(operation_name: Optional[str] = None, logger: Optional[StructuredLogger] = None):
    """Decorator for timing sync and async function calls."""
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or f"{func.__module__}.{func.__name__}"
        log = logger or get_structured_logger(func.__module__)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            with log_timing(op_name, logger=log):
                return func(*args, **kwargs)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            with log_timing(op_name, logger=log):
                return await func(*args, **kwargs)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def setup_logging() -> logging.Logger:
    LoggingConfig.setup_logging()
    return get_logger(__name__)
