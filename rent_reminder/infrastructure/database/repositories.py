"""Data access layer for tenants and communication logs"""

from datetime import datetime, timezone
from typing import Any, List, Optional
from sqlalchemy.orm import Session
from rent_reminder.domain.exceptions import InvariantViolation
from rent_reminder.infrastructure.database.models import CommunicationLog, Tenant
from rent_reminder.domain.models import (
    Channel,
    ContactMethod,
    DeliveryStatus,
    NewTenant,
    ReminderStage,
    TenantSnapshot,
    TenantStatus,
)


def to_snapshot(tenant: Tenant) -> TenantSnapshot:
    """
    Convert an ORM row into the immutable view the classifier reads.

    Raises:
        InvariantViolation: If a stored enum column holds an unknown value
    """
    try:
        reminder_stage = ReminderStage(tenant.reminder_stage)
        contact_method = ContactMethod(tenant.preferred_contact_method)
    except ValueError as e:
        raise InvariantViolation(f"Tenant {tenant.id} has invalid stored data: {e}") from e

    return TenantSnapshot(
        tenant_id=tenant.id,
        rent_due_day=tenant.rent_due_day,
        monthly_rent_cents=tenant.monthly_rent_cents,
        balance_owing_cents=tenant.balance_owing_cents,
        opted_out=bool(tenant.opted_out),
        lease_end_date=tenant.lease_end_date,
        last_message_sent=tenant.last_message_sent,
        reminder_stage=reminder_stage,
        preferred_contact_method=contact_method,
        email=tenant.email,
        phone_number=tenant.phone_number,
    )


class TenantRepository:
    """Repository for tenants"""

    def __init__(self, db: Session):
        self.db = db

    def list_tenants(self) -> List[Tenant]:
        return self.db.query(Tenant).order_by(Tenant.id).all()

    def list_tenant_ids(self) -> List[int]:
        return [row.id for row in self.db.query(Tenant.id).order_by(Tenant.id)]

    def get_tenant(self, tenant_id: int) -> Optional[Tenant]:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def create_tenant(self, data: NewTenant) -> Tenant:
        """Insert a tenant with system-managed defaults"""
        db_tenant = Tenant(
            full_name=data.full_name,
            email=data.email,
            phone_number=data.phone_number,
            property_name=data.property_name,
            unit_number=data.unit_number,
            monthly_rent_cents=data.monthly_rent_cents,
            rent_due_day=data.rent_due_day,
            lease_start_date=data.lease_start_date,
            lease_end_date=data.lease_end_date,
            preferred_contact_method=data.preferred_contact_method.value,
            opted_out=False,
            balance_owing_cents=0,
            status=TenantStatus.PAID.value,
            reminder_stage=ReminderStage.PRE_DUE.value,
            notes=data.notes,
        )
        self.db.add(db_tenant)
        self.db.flush()  # Get ID without committing
        return db_tenant

    def update_tenant(self, tenant: Tenant, **fields: Any) -> Tenant:
        """Set columns on a tenant; enum values are stored as their names"""
        for name, value in fields.items():
            if hasattr(value, "value"):
                value = value.value
            setattr(tenant, name, value)
        self.db.flush()
        return tenant


class CommunicationLogRepository:
    """Repository for the message audit log"""

    def __init__(self, db: Session):
        self.db = db

    def create_log(
        self,
        tenant_id: int,
        channel: Channel,
        stage: ReminderStage,
        status: DeliveryStatus,
        content: str,
        timestamp: Optional[datetime] = None,
    ) -> CommunicationLog:
        log = CommunicationLog(
            tenant_id=tenant_id,
            timestamp=timestamp or datetime.now(timezone.utc),
            channel=channel.value,
            message_type=stage.value,
            status=status.value,
            content=content,
        )
        self.db.add(log)
        self.db.flush()
        return log

    def get_logs_by_tenant(self, tenant_id: int, limit: int = 100) -> List[CommunicationLog]:
        """Fetch a tenant's messages, newest first"""
        return (
            self.db.query(CommunicationLog)
            .filter(CommunicationLog.tenant_id == tenant_id)
            .order_by(CommunicationLog.timestamp.desc(), CommunicationLog.id.desc())
            .limit(limit)
            .all()
        )
