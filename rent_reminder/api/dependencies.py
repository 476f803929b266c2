"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rent_reminder.infrastructure.clients.notifier import build_notifier
from rent_reminder.infrastructure.database.repositories import TenantRepository
from rent_reminder.infrastructure.database.session import get_db
from rent_reminder.infrastructure.database.store import (
    SqlAlchemyCommunicationLog,
    SqlAlchemyTenantStore,
)
from rent_reminder.services.tenants import TenantService
from rent_reminder.services.workflow import Notifier, WorkflowRunner


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_tenant_service(db: Session = Depends(get_db)) -> TenantService:
    return TenantService(TenantRepository(db))


def get_notifier(db: Session = Depends(get_db)) -> Notifier:
    return build_notifier(SqlAlchemyCommunicationLog(db))


def get_workflow_runner(
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> WorkflowRunner:
    return WorkflowRunner(SqlAlchemyTenantStore(db), notifier)
