"""Unit tests for payment recording transitions"""

import pytest
from rent_reminder.domain.exceptions import TenantValidationError
from rent_reminder.domain.models import ReminderStage, TenantStatus
from rent_reminder.domain.payments import apply_payment


def test_full_payment_resets_stage():
    """Test clearing the balance marks PAID and resets FINAL to PRE_DUE"""
    result = apply_payment(150000, ReminderStage.FINAL, 150000)

    assert result.balance_owing_cents == 0
    assert result.status == TenantStatus.PAID
    assert result.reminder_stage == ReminderStage.PRE_DUE


def test_partial_payment_keeps_stage():
    result = apply_payment(150000, ReminderStage.LATE_2, 50000)

    assert result.balance_owing_cents == 100000
    assert result.status == TenantStatus.PARTIAL
    assert result.reminder_stage == ReminderStage.LATE_2


def test_overpayment_clamps_at_zero():
    result = apply_payment(10000, ReminderStage.DUE, 25000)

    assert result.balance_owing_cents == 0
    assert result.status == TenantStatus.PAID


@pytest.mark.parametrize("amount", [0, -100])
def test_non_positive_payment_rejected(amount: int):
    with pytest.raises(TenantValidationError):
        apply_payment(10000, ReminderStage.DUE, amount)
