"""Unit tests for the reminder classifier"""

import pytest
from datetime import date, datetime
from rent_reminder.domain.models import ReminderAction, ReminderStage
from rent_reminder.domain.reminders import (
    SKIP_ALREADY_MESSAGED,
    SKIP_LEASE_ENDED,
    SKIP_OPTED_OUT,
    classify_tenant,
    select_reminder,
    skip_reason,
)

# Tenant due on the 15th; March 2024 is the reference month


def test_pre_due_three_days_out(make_tenant):
    """Scenario: 3 days before the due date with a full month owing"""
    action = classify_tenant(make_tenant(), date(2024, 3, 12))

    assert action == ReminderAction(ReminderStage.PRE_DUE, "Reminder: Your rent is due in 3 days.")


def test_pre_due_five_days_out(make_tenant):
    action = classify_tenant(make_tenant(), date(2024, 3, 10))

    assert action.stage == ReminderStage.PRE_DUE
    assert "5 days" in action.message


def test_pre_due_exact_days_only(make_tenant):
    """Test day 4 before due is skipped (sparse cadence, not a range)"""
    assert classify_tenant(make_tenant(), date(2024, 3, 11)) is None


def test_pre_due_requires_full_month_owing(make_tenant):
    tenant = make_tenant(balance_owing_cents=0)
    assert classify_tenant(tenant, date(2024, 3, 12)) is None


def test_due_today(make_tenant):
    """Scenario: due date with unchanged balance"""
    action = classify_tenant(make_tenant(), date(2024, 3, 15))

    assert action == ReminderAction(ReminderStage.DUE, "Heads up! Your rent is due today.")


def test_due_today_nothing_owed(make_tenant):
    assert classify_tenant(make_tenant(balance_owing_cents=0), date(2024, 3, 15)) is None


@pytest.mark.parametrize("today", [date(2024, 3, 18), date(2024, 3, 20)])
def test_late_1(make_tenant, today: date):
    """Test 3 and 5 days past due send LATE_1"""
    action = classify_tenant(make_tenant(reminder_stage=ReminderStage.DUE), today)

    assert action.stage == ReminderStage.LATE_1


def test_late_1_partial_balance(make_tenant):
    """Test late reminders fire for any outstanding balance"""
    tenant = make_tenant(balance_owing_cents=100, reminder_stage=ReminderStage.DUE)
    assert classify_tenant(tenant, date(2024, 3, 18)).stage == ReminderStage.LATE_1


def test_late_2_seven_days(make_tenant):
    """Scenario: 7 days past due, stage currently DUE"""
    action = classify_tenant(make_tenant(reminder_stage=ReminderStage.DUE), date(2024, 3, 22))

    assert action == ReminderAction(ReminderStage.LATE_2, "URGENT: Your rent is now 7 days overdue.")


def test_late_2_ten_days(make_tenant):
    action = classify_tenant(make_tenant(reminder_stage=ReminderStage.LATE_2), date(2024, 3, 25))

    assert action.stage == ReminderStage.LATE_2
    assert "10 days" in action.message


@pytest.mark.parametrize("today", [date(2024, 3, 19), date(2024, 3, 21), date(2024, 3, 23)])
def test_late_gaps_send_nothing(make_tenant, today: date):
    """Test days 4, 6 and 8 past due are quiet"""
    assert classify_tenant(make_tenant(reminder_stage=ReminderStage.LATE_1), today) is None


def test_late_requires_balance(make_tenant):
    assert classify_tenant(make_tenant(balance_owing_cents=0), date(2024, 3, 22)) is None


def test_final_notice_sent_once(make_tenant):
    """Scenario: 14 days past due sends FINAL, then never again"""
    tenant = make_tenant(reminder_stage=ReminderStage.LATE_2)
    action = classify_tenant(tenant, date(2024, 3, 29))

    assert action == ReminderAction(
        ReminderStage.FINAL, "FINAL NOTICE: Your rent is significantly overdue."
    )

    after_final = make_tenant(reminder_stage=ReminderStage.FINAL)
    assert classify_tenant(after_final, date(2024, 3, 29)) is None
    assert classify_tenant(after_final, date(2024, 4, 2)) is None


def test_final_after_stage_reset(make_tenant):
    """Test a tenant reset to PRE_DUE by payment can get FINAL again"""
    tenant = make_tenant(reminder_stage=ReminderStage.PRE_DUE)
    assert classify_tenant(tenant, date(2024, 4, 1)).stage == ReminderStage.FINAL


def test_opt_out_dominates(make_tenant):
    tenant = make_tenant(opted_out=True)

    assert classify_tenant(tenant, date(2024, 3, 15)) is None
    assert skip_reason(tenant, date(2024, 3, 15)) == SKIP_OPTED_OUT


def test_lease_expired_dominates(make_tenant):
    tenant = make_tenant(lease_end_date=date(2024, 3, 14))

    assert classify_tenant(tenant, date(2024, 3, 15)) is None
    assert skip_reason(tenant, date(2024, 3, 15)) == SKIP_LEASE_ENDED


def test_lease_ending_today_still_reminded(make_tenant):
    tenant = make_tenant(lease_end_date=date(2024, 3, 15))
    assert classify_tenant(tenant, date(2024, 3, 15)).stage == ReminderStage.DUE


def test_already_messaged_today(make_tenant):
    """Test any message earlier the same day suppresses further reminders"""
    tenant = make_tenant(last_message_sent=datetime(2024, 3, 15, 0, 5))

    assert classify_tenant(tenant, date(2024, 3, 15)) is None
    assert skip_reason(tenant, date(2024, 3, 15)) == SKIP_ALREADY_MESSAGED


def test_messaged_yesterday_not_deduped(make_tenant):
    tenant = make_tenant(last_message_sent=datetime(2024, 3, 14, 23, 59))
    assert classify_tenant(tenant, date(2024, 3, 15)).stage == ReminderStage.DUE


def test_gate_order(make_tenant):
    """Test opt-out is reported before lease expiry and dedupe"""
    tenant = make_tenant(
        opted_out=True,
        lease_end_date=date(2024, 1, 1),
        last_message_sent=datetime(2024, 3, 15, 9, 0),
    )
    assert skip_reason(tenant, date(2024, 3, 15)) == SKIP_OPTED_OUT


def test_due_day_31_in_thirty_day_month(make_tenant):
    """Test a due day of 31 degrades to Apr 30 through the classifier"""
    tenant = make_tenant(rent_due_day=31)

    assert classify_tenant(tenant, date(2024, 4, 27)).stage == ReminderStage.PRE_DUE
    assert classify_tenant(tenant, date(2024, 4, 30)).stage == ReminderStage.DUE
    assert classify_tenant(tenant, date(2024, 5, 3)).stage == ReminderStage.LATE_1


def test_classify_is_pure(make_tenant):
    tenant = make_tenant()
    today = date(2024, 3, 12)
    assert classify_tenant(tenant, today) == classify_tenant(tenant, today)


def test_select_reminder_applies_rules_only(make_tenant):
    """Test rule selection ignores the gates, which classify_tenant applies first"""
    tenant = make_tenant(opted_out=True)
    today = date(2024, 3, 15)

    assert select_reminder(tenant, today).stage == ReminderStage.DUE
    assert classify_tenant(tenant, today) is None
    assert classify_tenant(make_tenant(), today) == select_reminder(make_tenant(), today)
