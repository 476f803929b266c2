"""Integration tests for the SQLAlchemy tenant store driven by the workflow runner"""

import pytest
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from rent_reminder.domain.exceptions import ErrorKind, InvariantViolation
from rent_reminder.domain.models import ReminderStage
from rent_reminder.infrastructure.database.models import Tenant
from rent_reminder.infrastructure.database.store import SqlAlchemyTenantStore
from rent_reminder.services.workflow import WorkflowRunner


def add_tenant(db: Session, **overrides) -> Tenant:
    fields = dict(
        full_name="Dana Reyes",
        email="dana@example.com",
        property_name="Maple Court",
        unit_number="4B",
        monthly_rent_cents=150000,
        rent_due_day=15,
        balance_owing_cents=150000,
        preferred_contact_method="EMAIL",
        reminder_stage="PRE_DUE",
    )
    fields.update(overrides)
    tenant = Tenant(**fields)
    db.add(tenant)
    db.commit()
    return tenant


def test_get_snapshot_rejects_unknown_contact_method(db: Session):
    tenant = add_tenant(db, preferred_contact_method="FAX")

    with pytest.raises(InvariantViolation, match="FAX"):
        SqlAlchemyTenantStore(db).get_snapshot(tenant.id)


async def test_bad_row_fails_only_its_tenant(db: Session, fake_notifier):
    """Test an unreadable stored row is reported for that tenant and the rest still run"""
    bad = add_tenant(db, preferred_contact_method="FAX")
    good = add_tenant(db, email="lee@example.com")
    runner = WorkflowRunner(
        SqlAlchemyTenantStore(db),
        fake_notifier,
        clock=lambda: datetime(2024, 3, 15, 9, 0, tzinfo=timezone.utc),
    )

    summary = await runner.run_daily_check()

    assert summary.aborted_reason is None
    assert (summary.evaluated, summary.sent, summary.errored) == (2, 1, 1)
    failed, sent = summary.outcomes
    assert failed.tenant_id == bad.id
    assert failed.error_kind == ErrorKind.INVARIANT
    assert "FAX" in failed.error
    assert sent.tenant_id == good.id
    assert sent.stage == ReminderStage.DUE
    assert [m["to"] for m in fake_notifier.sent] == ["lee@example.com"]

    db.refresh(good)
    assert good.reminder_stage == "DUE"
