"""Tenant management: onboarding, payments, opt-out"""

from datetime import datetime, timezone
from typing import List, Optional

from rent_reminder.domain.exceptions import TenantNotFoundError, TenantValidationError
from rent_reminder.domain.models import NewTenant, ReminderStage, TenantStatus
from rent_reminder.domain.payments import apply_payment
from rent_reminder.infrastructure.database.models import Tenant
from rent_reminder.infrastructure.database.repositories import TenantRepository


def validate_new_tenant(data: NewTenant) -> None:
    """
    Raises:
        TenantValidationError: On missing fields or out-of-range rent terms
    """
    if not data.full_name or not data.email or not data.monthly_rent_cents:
        raise TenantValidationError("Missing required tenant fields")
    if not data.property_name or not data.unit_number:
        raise TenantValidationError("Property name and unit number are required")
    if data.monthly_rent_cents <= 0:
        raise TenantValidationError("Monthly rent must be greater than 0")
    if not 1 <= data.rent_due_day <= 31:
        raise TenantValidationError("Rent due day must be between 1 and 31")


class TenantService:
    """Tenant operations outside the reminder pass; caller commits"""

    def __init__(self, repo: TenantRepository):
        self.repo = repo

    def list_tenants(self) -> List[Tenant]:
        return self.repo.list_tenants()

    def get_tenant(self, tenant_id: int) -> Tenant:
        tenant = self.repo.get_tenant(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    def create_tenant(self, data: NewTenant) -> Tenant:
        validate_new_tenant(data)
        return self.repo.create_tenant(data)

    def record_payment(
        self, tenant_id: int, amount_cents: int, paid_at: Optional[datetime] = None
    ) -> Tenant:
        """Apply a payment; a cleared balance resets the reminder stage"""
        tenant = self.get_tenant(tenant_id)
        result = apply_payment(
            tenant.balance_owing_cents, ReminderStage(tenant.reminder_stage), amount_cents
        )
        return self.repo.update_tenant(
            tenant,
            last_payment_date=paid_at or datetime.now(timezone.utc),
            last_payment_amount_cents=amount_cents,
            balance_owing_cents=result.balance_owing_cents,
            status=result.status,
            reminder_stage=result.reminder_stage,
        )

    def set_balance(self, tenant_id: int, status: TenantStatus, balance_owing_cents: int) -> Tenant:
        """Admin adjustment, e.g. when a new month's rent is charged"""
        if balance_owing_cents < 0:
            raise TenantValidationError("Balance owing cannot be negative")
        tenant = self.get_tenant(tenant_id)
        return self.repo.update_tenant(tenant, status=status, balance_owing_cents=balance_owing_cents)

    def opt_out(self, tenant_id: int) -> Tenant:
        tenant = self.get_tenant(tenant_id)
        return self.repo.update_tenant(tenant, opted_out=True)
