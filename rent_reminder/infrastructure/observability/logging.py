"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from rent_reminder.domain.models import ReminderStage, RunSummary

logger = logging.getLogger("rent_reminder.workflow")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "rent-reminder"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def log_skip(tenant_id: int, reason: str) -> None:
    # "no_rule_matched" is the normal case for most tenants on most days
    level = logging.DEBUG if reason == "no_rule_matched" else logging.INFO
    logger.log(level, "Tenant skipped", extra={"tenant_id": tenant_id, "reason": reason})


def log_reminder_sent(tenant_id: int, stage: ReminderStage, channels: list[str]) -> None:
    logger.info(
        "Reminder sent",
        extra={"tenant_id": tenant_id, "stage": stage.value, "channels": channels},
    )


def log_tenant_error(tenant_id: int, error_kind: str, error: str) -> None:
    logger.error(
        "Tenant processing failed",
        extra={"tenant_id": tenant_id, "error_kind": error_kind, "error": error},
    )


def log_run_summary(summary: RunSummary, duration_ms: float) -> None:
    """Log structured pass outcome for analysis"""
    logger.info(
        "Daily check completed",
        extra={
            "step": "daily_check_complete",
            "run_date": summary.run_date.isoformat(),
            "evaluated": summary.evaluated,
            "sent": summary.sent,
            "skipped": summary.skipped,
            "errored": summary.errored,
            "aborted_reason": summary.aborted_reason,
            "duration_ms": duration_ms,
        },
    )
