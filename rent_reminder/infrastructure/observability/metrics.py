"""Prometheus metrics for reminder volume, skips, failures and run latency"""

from prometheus_client import Counter, Histogram

from rent_reminder.domain.models import RunSummary

# Reminder metrics
reminders_sent_counter = Counter(
    "rent_reminders_sent_total",
    "Reminder messages delivered",
    ["stage", "channel"],
)

reminder_skips_counter = Counter(
    "rent_reminder_skips_total",
    "Tenants evaluated without sending",
    ["reason"],  # opted_out | lease_ended | already_messaged_today | no_rule_matched
)

reminder_errors_counter = Counter(
    "rent_reminder_errors_total",
    "Tenants whose processing failed",
    ["kind"],
)

run_duration_histogram = Histogram(
    "rent_reminder_run_duration_seconds",
    "Daily check duration",
    buckets=[0.1, 0.5, 1.0, 5.0, 15.0, 60.0, 300.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_reminder(stage: str, channel: str) -> None:
    reminders_sent_counter.labels(stage=stage, channel=channel).inc()


def record_run(summary: RunSummary) -> None:
    """Record skip and error counts from a finished pass"""
    for outcome in summary.outcomes:
        if outcome.error_kind is not None:
            reminder_errors_counter.labels(kind=outcome.error_kind.value).inc()
        elif outcome.skip_reason is not None:
            reminder_skips_counter.labels(reason=outcome.skip_reason).inc()
