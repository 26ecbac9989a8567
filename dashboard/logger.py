"""
Structured logging for the Agent Insights service, built on structlog.
Widget computations log through get_logger(widget) so failures name their widget.
Every event carries the log level, an ISO-8601 timestamp and, inside a
request, the bound request_id.
"""

from __future__ import annotations

import structlog


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Call once at application startup to wire structured logging."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            structlog.get_level_from_name(log_level),
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(widget: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a bound logger, optionally pre-bound to a dashboard widget name."""
    log = structlog.get_logger()
    if widget:
        log = log.bind(widget=widget)
    return log
