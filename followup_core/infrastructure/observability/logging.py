"""
Structured logging setup for the follow-up reminder engine.
Provides JSON-formatted logs with consistent fields for diagnostics.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from followup_core.config import settings


def setup_logging(log_level: str | None = None) -> None:
    """
    Configure structured logging with JSON output.

    Call once at process start-up, before the first reminder check.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to settings.LOG_LEVEL
    """
    log_level = log_level or settings.LOG_LEVEL

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_engine_context,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def _add_engine_context(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every entry with the component that produced it."""
    event_dict.setdefault("component", "followup_core")
    return event_dict


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_reminder_check(checked: int, overdue: int, newly_overdue: list[str]) -> None:
    """Log a polling check result with consistent fields."""
    logger = get_logger("reminders.polling")

    log_data = {
        "checked": checked,
        "overdue": overdue,
        "newly_overdue_count": len(newly_overdue),
    }

    if newly_overdue:
        logger.info("Reminders became overdue", newly_overdue=newly_overdue, **log_data)
    else:
        logger.debug("Reminder check completed", **log_data)
