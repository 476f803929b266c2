"""Tenant management endpoints under /v1/tenants"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from rent_reminder.api.dependencies import get_request_id, get_tenant_service
from rent_reminder.api.errors import to_http_exception
from rent_reminder.api.v1.schemas import (
    BalanceUpdateRequest,
    CommunicationLogItem,
    PaymentRequest,
    TenantCreateRequest,
    TenantResponse,
)
from rent_reminder.domain.exceptions import DomainException
from rent_reminder.infrastructure.database.repositories import CommunicationLogRepository
from rent_reminder.infrastructure.database.session import get_db
from rent_reminder.services.tenants import TenantService

router = APIRouter()


@router.get("/tenants", response_model=List[TenantResponse])
def list_tenants(service: TenantService = Depends(get_tenant_service)):
    return service.list_tenants()


@router.post("/tenants", response_model=TenantResponse, status_code=201)
def create_tenant(
    request_body: TenantCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: TenantService = Depends(get_tenant_service),
):
    """Onboard a tenant with PAID status, zero balance and PRE_DUE stage"""
    try:
        tenant = service.create_tenant(request_body.to_domain())
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Tenant creation rejected: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_exception(e)
    return tenant


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
def get_tenant(tenant_id: int, service: TenantService = Depends(get_tenant_service)):
    try:
        return service.get_tenant(tenant_id)
    except DomainException as e:
        raise to_http_exception(e)


@router.post("/tenants/{tenant_id}/payments", response_model=TenantResponse)
def record_payment(
    tenant_id: int,
    request_body: PaymentRequest,
    db: Session = Depends(get_db),
    service: TenantService = Depends(get_tenant_service),
):
    """Record a payment; clearing the balance resets the reminder stage to PRE_DUE"""
    try:
        tenant = service.record_payment(tenant_id, request_body.amount_cents)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise to_http_exception(e)
    return tenant


@router.put("/tenants/{tenant_id}/balance", response_model=TenantResponse)
def update_balance(
    tenant_id: int,
    request_body: BalanceUpdateRequest,
    db: Session = Depends(get_db),
    service: TenantService = Depends(get_tenant_service),
):
    try:
        tenant = service.set_balance(tenant_id, request_body.status, request_body.balance_owing_cents)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise to_http_exception(e)
    return tenant


@router.post("/tenants/{tenant_id}/opt-out", response_model=TenantResponse)
def opt_out(
    tenant_id: int,
    db: Session = Depends(get_db),
    service: TenantService = Depends(get_tenant_service),
):
    """Stop all automated reminders for a tenant"""
    try:
        tenant = service.opt_out(tenant_id)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise to_http_exception(e)
    return tenant


@router.get("/tenants/{tenant_id}/logs", response_model=List[CommunicationLogItem])
def get_communication_logs(
    tenant_id: int,
    db: Session = Depends(get_db),
    service: TenantService = Depends(get_tenant_service),
):
    """Message audit log for a tenant, newest first"""
    try:
        service.get_tenant(tenant_id)
    except DomainException as e:
        raise to_http_exception(e)
    return CommunicationLogRepository(db).get_logs_by_tenant(tenant_id)
