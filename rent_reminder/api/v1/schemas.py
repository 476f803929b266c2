"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import List, Optional

from rent_reminder.domain.models import (
    ContactMethod,
    NewTenant,
    ReminderStage,
    RunSummary,
    TenantOutcome,
    TenantStatus,
)


class TenantCreateRequest(BaseModel):
    """Request body for POST /v1/tenants"""

    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone_number: str = Field(..., min_length=1)
    property_name: str = Field(..., min_length=1)
    unit_number: str = Field(..., min_length=1)
    monthly_rent_cents: int = Field(..., gt=0, description="Monthly rent in cents")
    rent_due_day: int = Field(..., ge=1, le=31, description="Day of month rent is due")
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL
    notes: Optional[str] = None

    def to_domain(self) -> NewTenant:
        return NewTenant(**self.model_dump())


class TenantResponse(BaseModel):
    """Tenant as exposed over the API (opted_out is always a boolean)"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    property_name: str
    unit_number: str
    monthly_rent_cents: int
    rent_due_day: int
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    preferred_contact_method: ContactMethod
    opted_out: bool
    last_payment_date: Optional[datetime] = None
    last_payment_amount_cents: Optional[int] = None
    balance_owing_cents: int
    status: TenantStatus
    last_message_sent: Optional[datetime] = None
    reminder_stage: ReminderStage
    notes: Optional[str] = None


class PaymentRequest(BaseModel):
    """Request body for POST /v1/tenants/{tenant_id}/payments"""

    amount_cents: int = Field(..., gt=0, description="Payment amount in cents")


class BalanceUpdateRequest(BaseModel):
    """Request body for PUT /v1/tenants/{tenant_id}/balance"""

    balance_owing_cents: int = Field(..., ge=0)
    status: TenantStatus


class CommunicationLogItem(BaseModel):
    """Single message attempt in a tenant's audit log"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    timestamp: datetime
    channel: str
    message_type: str
    status: str
    content: Optional[str] = None


class TenantOutcomeSchema(BaseModel):
    tenant_id: int
    status: str
    stage: Optional[ReminderStage] = None
    skip_reason: Optional[str] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: TenantOutcome) -> "TenantOutcomeSchema":
        return cls(
            tenant_id=outcome.tenant_id,
            status=outcome.status,
            stage=outcome.stage,
            skip_reason=outcome.skip_reason,
            error_kind=outcome.error_kind.value if outcome.error_kind else None,
            error=outcome.error,
        )


class RunSummaryResponse(BaseModel):
    """Response for POST /v1/workflow/daily-check"""

    run_date: date
    evaluated: int
    sent: int
    skipped: int
    errored: int
    aborted_reason: Optional[str] = None
    outcomes: List[TenantOutcomeSchema]

    @classmethod
    def from_summary(cls, summary: RunSummary) -> "RunSummaryResponse":
        return cls(
            run_date=summary.run_date,
            evaluated=summary.evaluated,
            sent=summary.sent,
            skipped=summary.skipped,
            errored=summary.errored,
            aborted_reason=summary.aborted_reason,
            outcomes=[TenantOutcomeSchema.from_outcome(o) for o in summary.outcomes],
        )
