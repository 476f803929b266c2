"""Pytest fixtures for testing"""

import dataclasses
import pytest
from datetime import datetime
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from rent_reminder.api.main import create_app
from rent_reminder.infrastructure.database.models import Base
from rent_reminder.infrastructure.database.session import get_db
from rent_reminder.domain.exceptions import NotifierError, TenantNotFoundError, TenantStoreError
from rent_reminder.domain.models import (
    Channel,
    ContactMethod,
    DeliveryStatus,
    ReminderStage,
    TenantSnapshot,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_tenant() -> Callable[..., TenantSnapshot]:
    """Factory for snapshots: due on the 15th, owing one month's rent"""

    def _make(**overrides) -> TenantSnapshot:
        fields = dict(
            tenant_id=1,
            rent_due_day=15,
            monthly_rent_cents=150000,  # $1500
            balance_owing_cents=150000,
            email="tenant@example.com",
            phone_number="+15550100",
            preferred_contact_method=ContactMethod.EMAIL,
        )
        fields.update(overrides)
        return TenantSnapshot(**fields)

    return _make


class FakeTenantStore:
    """In-memory tenant store; updates replace the stored snapshot"""

    def __init__(self, tenants: list[TenantSnapshot]):
        self.tenants = {t.tenant_id: t for t in tenants}
        self.updates: list[tuple[int, datetime, ReminderStage]] = []
        self.fail_list = False
        self.fail_update_for: set[int] = set()

    def list_active_ids(self) -> list[int]:
        if self.fail_list:
            raise TenantStoreError("database is down")
        return list(self.tenants)

    def get_snapshot(self, tenant_id: int) -> TenantSnapshot:
        if tenant_id not in self.tenants:
            raise TenantNotFoundError(tenant_id)
        return self.tenants[tenant_id]

    def apply_reminder_update(
        self, tenant_id: int, last_message_sent: datetime, reminder_stage: ReminderStage
    ) -> None:
        if tenant_id in self.fail_update_for:
            raise TenantStoreError(f"could not update tenant {tenant_id}")
        self.updates.append((tenant_id, last_message_sent, reminder_stage))
        self.tenants[tenant_id] = dataclasses.replace(
            self.tenants[tenant_id],
            last_message_sent=last_message_sent,
            reminder_stage=reminder_stage,
        )


class FakeNotifier:
    """Records sends; addresses listed in `failing` raise NotifierError"""

    def __init__(self, failing: set[str] | None = None):
        self.sent: list[dict] = []
        self.failing = failing or set()

    async def send_email(self, address, subject, body, tenant_id, stage) -> None:
        if address in self.failing:
            raise NotifierError(f"email to {address} bounced")
        self.sent.append(
            {"channel": Channel.EMAIL, "to": address, "subject": subject, "body": body,
             "tenant_id": tenant_id, "stage": stage}
        )

    async def send_sms(self, number, body, tenant_id, stage) -> None:
        if number in self.failing:
            raise NotifierError(f"sms to {number} failed")
        self.sent.append(
            {"channel": Channel.SMS, "to": number, "body": body, "tenant_id": tenant_id, "stage": stage}
        )


class RecordingAuditLog:
    def __init__(self):
        self.records: list[tuple[int, Channel, ReminderStage, DeliveryStatus, str]] = []

    def record(self, tenant_id, channel, stage, status, content) -> None:
        self.records.append((tenant_id, channel, stage, status, content))


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def audit_log() -> RecordingAuditLog:
    return RecordingAuditLog()


@pytest.fixture
def fake_store() -> Callable[..., FakeTenantStore]:
    """Factory: fake_store(tenant, ...) builds an in-memory store"""
    return lambda *tenants: FakeTenantStore(list(tenants))


@pytest.fixture
def bouncing_notifier() -> FakeNotifier:
    """Notifier whose sends to bounce@example.com fail"""
    return FakeNotifier(failing={"bounce@example.com"})
