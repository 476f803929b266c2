"""Tenant store and audit log adapters used by the workflow runner"""

from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from rent_reminder.domain.exceptions import TenantNotFoundError, TenantStoreError
from rent_reminder.domain.models import Channel, DeliveryStatus, ReminderStage, TenantSnapshot
from rent_reminder.infrastructure.database.repositories import (
    CommunicationLogRepository,
    TenantRepository,
    to_snapshot,
)


class SqlAlchemyTenantStore:
    """Tenant store backed by a SQLAlchemy session; commits per update"""

    def __init__(self, db: Session):
        self.db = db
        self.tenants = TenantRepository(db)

    def list_active_ids(self) -> List[int]:
        """
        Ids of all tenants, in id order.

        Snapshots are loaded one at a time through `get_snapshot` so that a
        row which cannot be converted fails only its own tenant.

        Opted-out and expired-lease tenants are included on purpose: the
        classifier gates them so the skip is logged and counted.
        """
        try:
            return self.tenants.list_tenant_ids()
        except SQLAlchemyError as e:
            raise TenantStoreError(f"Could not list tenants: {e}") from e

    def get_snapshot(self, tenant_id: int) -> TenantSnapshot:
        try:
            tenant = self.tenants.get_tenant(tenant_id)
        except SQLAlchemyError as e:
            raise TenantStoreError(f"Could not load tenant {tenant_id}: {e}") from e
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return to_snapshot(tenant)

    def apply_reminder_update(
        self,
        tenant_id: int,
        last_message_sent: datetime,
        reminder_stage: ReminderStage,
    ) -> None:
        try:
            tenant = self.tenants.get_tenant(tenant_id)
            if tenant is None:
                raise TenantNotFoundError(tenant_id)
            self.tenants.update_tenant(
                tenant,
                last_message_sent=last_message_sent,
                reminder_stage=reminder_stage,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TenantStoreError(f"Could not update tenant {tenant_id}: {e}") from e


class SqlAlchemyCommunicationLog:
    """Audit log writer used by notifiers"""

    def __init__(self, db: Session):
        self.db = db
        self.logs = CommunicationLogRepository(db)

    def record(
        self,
        tenant_id: int,
        channel: Channel,
        stage: ReminderStage,
        status: DeliveryStatus,
        content: str,
    ) -> None:
        try:
            self.logs.create_log(tenant_id, channel, stage, status, content)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TenantStoreError(f"Could not write communication log: {e}") from e
