"""
Structured logging for the hub priorities service.

JSON lines in deployed environments, a readable console renderer in
development. Request-scoped fields (request id, path, user id) are bound
through structlog contextvars and merged into every entry.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

SERVICE_NAME = "hub-priorities"


def setup_logging(log_level: str = "INFO", *, environment: str = "production") -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "development" switches to the console renderer
    """
    renderer = (
        structlog.dev.ConsoleRenderer()
        if environment == "development"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _service_context(environment),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _service_context(environment: str):
    def processor(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(**fields: Any) -> None:
    """Attach fields to every log entry for the rest of the current request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_health_check(component: str, healthy: bool, latency_ms: float, error: str | None = None):
    """Log a readiness probe result; failures go out at error level."""
    logger = get_logger("health")
    fields: dict[str, Any] = {"component": component, "healthy": healthy, "latency_ms": latency_ms}
    if error:
        fields["error"] = error

    if healthy:
        logger.info("Readiness check passed", **fields)
    else:
        logger.error("Readiness check failed", **fields)


def log_request(method: str, path: str, status_code: int, duration_ms: float):
    logger = get_logger("http")
    fields = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }
    if status_code >= 500:
        logger.error("HTTP request errored", **fields)
    elif status_code >= 400:
        logger.warning("HTTP request rejected", **fields)
    else:
        logger.info("HTTP request completed", **fields)
