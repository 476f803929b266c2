"""Payment recording - balance and reminder-stage transitions"""

from rent_reminder.domain.exceptions import TenantValidationError
from rent_reminder.domain.models import PaymentResult, ReminderStage, TenantStatus


def apply_payment(
    balance_owing_cents: int,
    current_stage: ReminderStage,
    amount_cents: int,
) -> PaymentResult:
    """
    Apply a payment to an outstanding balance.

    Overpayment clamps the balance at zero. A fully cleared balance marks
    the tenant PAID and resets the reminder stage to PRE_DUE, which is the
    only way a FINAL stage is ever left. A partial payment keeps the stage.
    """
    if amount_cents <= 0:
        raise TenantValidationError("Payment amount must be greater than 0")

    new_balance = max(0, balance_owing_cents - amount_cents)

    if new_balance == 0:
        return PaymentResult(new_balance, TenantStatus.PAID, ReminderStage.PRE_DUE)

    return PaymentResult(new_balance, TenantStatus.PARTIAL, current_stage)
