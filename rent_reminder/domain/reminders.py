"""Reminder classifier - decides which reminder, if any, a tenant gets today"""

from datetime import date
from typing import Optional

from rent_reminder.domain.models import ReminderAction, ReminderStage, TenantSnapshot
from rent_reminder.utils.date_utils import days_past_due, days_until_due, is_same_day, to_date

SKIP_OPTED_OUT = "opted_out"
SKIP_LEASE_ENDED = "lease_ended"
SKIP_ALREADY_MESSAGED = "already_messaged_today"
SKIP_NO_RULE = "no_rule_matched"

# Exact day offsets, not ranges: nobody is reminded 4 days before or after.
PRE_DUE_DAYS = (3, 5)
LATE_1_DAYS = (3, 5)
LATE_2_DAYS = (7, 10)
FINAL_AFTER_DAYS = 14


def skip_reason(tenant: TenantSnapshot, today: date) -> Optional[str]:
    """
    Gates evaluated before any reminder rule.

    Order matters: opt-out, then lease expiry, then the one-message-per-day
    rule. Returns None when the tenant is eligible for rule evaluation.
    """
    today = to_date(today)

    if tenant.opted_out:
        return SKIP_OPTED_OUT

    if tenant.lease_end_date is not None and to_date(tenant.lease_end_date) < today:
        return SKIP_LEASE_ENDED

    if is_same_day(tenant.last_message_sent, today):
        return SKIP_ALREADY_MESSAGED

    return None


def select_reminder(tenant: TenantSnapshot, today: date) -> Optional[ReminderAction]:
    """
    Apply the reminder rules to a tenant that already passed `skip_reason`.

    Rules (first match wins):
    - 3 or 5 days before due, balance covers a full month: PRE_DUE
    - due today, balance covers a full month: DUE
    - with any balance outstanding:
        - 3 or 5 days late: LATE_1
        - 7 or 10 days late: LATE_2
        - 14+ days late and no FINAL sent yet: FINAL

    Pure function: no I/O, same inputs give the same answer.
    """
    today = to_date(today)
    owes_full_month = tenant.balance_owing_cents >= tenant.monthly_rent_cents
    until = days_until_due(tenant.rent_due_day, today)

    if until in PRE_DUE_DAYS and owes_full_month:
        return ReminderAction(ReminderStage.PRE_DUE, f"Reminder: Your rent is due in {until} days.")

    if until == 0 and owes_full_month:
        return ReminderAction(ReminderStage.DUE, "Heads up! Your rent is due today.")

    if tenant.balance_owing_cents <= 0:
        return None

    past = days_past_due(tenant.rent_due_day, today)

    if past in LATE_1_DAYS:
        return ReminderAction(
            ReminderStage.LATE_1, "We noticed we haven't received your rent payment yet."
        )
    if past in LATE_2_DAYS:
        return ReminderAction(ReminderStage.LATE_2, f"URGENT: Your rent is now {past} days overdue.")
    if past >= FINAL_AFTER_DAYS and tenant.reminder_stage != ReminderStage.FINAL:
        return ReminderAction(ReminderStage.FINAL, "FINAL NOTICE: Your rent is significantly overdue.")

    return None


def classify_tenant(tenant: TenantSnapshot, today: date) -> Optional[ReminderAction]:
    """Map a tenant snapshot to the reminder to send today (gates, then rules)"""
    if skip_reason(tenant, today) is not None:
        return None
    return select_reminder(tenant, today)
