"""Reminder workflow triggers under /v1/workflow"""

import logging
from fastapi import APIRouter, Depends, Request

from rent_reminder.api.dependencies import get_request_id, get_workflow_runner
from rent_reminder.api.errors import to_http_exception
from rent_reminder.api.v1.schemas import RunSummaryResponse, TenantOutcomeSchema
from rent_reminder.domain.exceptions import DomainException
from rent_reminder.services.workflow import WorkflowRunner

router = APIRouter()


@router.post("/workflow/daily-check", response_model=RunSummaryResponse)
async def trigger_daily_check(
    request: Request,
    runner: WorkflowRunner = Depends(get_workflow_runner),
):
    """
    Run one reminder pass over all tenants.

    Always acknowledges the batch; per-tenant failures are reported in
    the summary counts, not as an error status.
    """
    logging.info("Daily check triggered", extra={"request_id": get_request_id(request)})
    summary = await runner.run_daily_check()
    return RunSummaryResponse.from_summary(summary)


@router.post("/workflow/tenants/{tenant_id}/evaluate", response_model=TenantOutcomeSchema)
async def evaluate_tenant(
    tenant_id: int,
    runner: WorkflowRunner = Depends(get_workflow_runner),
):
    """Evaluate (and possibly remind) a single tenant now"""
    try:
        outcome = await runner.evaluate_tenant(tenant_id)
    except DomainException as e:
        raise to_http_exception(e)
    return TenantOutcomeSchema.from_outcome(outcome)
