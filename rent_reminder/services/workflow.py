"""Workflow runner - one daily reminder pass over all tenants"""

import logging
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterable, List, Optional, Protocol, TypeVar

from rent_reminder.config import settings
from rent_reminder.domain.exceptions import NotifierError, TenantStoreError, error_kind_of
from rent_reminder.domain.models import (
    Channel,
    ReminderAction,
    ReminderStage,
    RunSummary,
    TenantOutcome,
    TenantSnapshot,
)
from rent_reminder.domain.reminders import SKIP_NO_RULE, select_reminder, skip_reason
from rent_reminder.infrastructure.observability.logging import (
    log_reminder_sent,
    log_run_summary,
    log_skip,
    log_tenant_error,
)
from rent_reminder.infrastructure.observability.metrics import (
    record_reminder,
    record_run,
    run_duration_histogram,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TenantStore(Protocol):
    def list_active_ids(self) -> List[int]: ...

    def get_snapshot(self, tenant_id: int) -> TenantSnapshot: ...

    def apply_reminder_update(
        self, tenant_id: int, last_message_sent: datetime, reminder_stage: ReminderStage
    ) -> None: ...


class Notifier(Protocol):
    async def send_email(
        self, address: str, subject: str, body: str, tenant_id: int, stage: ReminderStage
    ) -> None: ...

    async def send_sms(self, number: str, body: str, tenant_id: int, stage: ReminderStage) -> None: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def isolate_each(
    items: Iterable[T],
    process: Callable[[T], Awaitable[TenantOutcome]],
    key: Callable[[T], int],
) -> List[TenantOutcome]:
    """
    Run `process` over every item, one outcome per item.

    An exception raised while processing an item becomes an error outcome
    for that item only; the remaining items are still processed.
    """
    outcomes = []
    for item in items:
        try:
            outcomes.append(await process(item))
        except Exception as e:
            outcomes.append(
                TenantOutcome(tenant_id=key(item), error_kind=error_kind_of(e), error=str(e))
            )
    return outcomes


class WorkflowRunner:
    """
    Orchestrates a reminder pass.

    Flow per tenant:
    1. Load the snapshot (a bad stored row fails only that tenant)
    2. Classify (pure) against today's date
    3. Send through the tenant's preferred channel(s)
    4. Persist last_message_sent + reminder_stage

    Store and notifier are injected so tests can substitute fakes.
    """

    def __init__(
        self,
        store: TenantStore,
        notifier: Notifier,
        clock: Optional[Callable[[], datetime]] = None,
        subject_template: Optional[str] = None,
    ):
        self.store = store
        self.notifier = notifier
        self.clock = clock or utcnow
        self.subject_template = subject_template or settings.email_subject_template

    async def run_daily_check(self) -> RunSummary:
        """
        Evaluate every tenant once.

        Never raises for store or notifier failures: per-tenant errors are
        reported in the summary, and a failure to list tenants at all
        yields an empty summary with `aborted_reason` set.
        """
        start_time = time.time()
        now = self.clock()
        summary = RunSummary(run_date=now.date())
        logger.info("Starting daily check", extra={"run_date": summary.run_date.isoformat()})

        try:
            tenant_ids = self.store.list_active_ids()
        except TenantStoreError as e:
            logger.error("Could not load tenants, daily check aborted", extra={"error": str(e)})
            summary.aborted_reason = str(e)
        else:
            summary.outcomes = await isolate_each(
                tenant_ids,
                lambda tenant_id: self._process(self.store.get_snapshot(tenant_id), now),
                key=lambda tenant_id: tenant_id,
            )

        for outcome in summary.outcomes:
            if outcome.error_kind is not None:
                log_tenant_error(outcome.tenant_id, outcome.error_kind.value, outcome.error or "")

        duration = time.time() - start_time
        run_duration_histogram.observe(duration)
        record_run(summary)
        log_run_summary(summary, duration * 1000)
        return summary

    async def evaluate_tenant(self, tenant_id: int) -> TenantOutcome:
        """
        Evaluate a single tenant on demand.

        Unlike the batch pass, errors propagate to the caller
        (TenantNotFoundError for an unknown id).
        """
        snapshot = self.store.get_snapshot(tenant_id)
        return await self._process(snapshot, self.clock())

    async def _process(self, tenant: TenantSnapshot, now: datetime) -> TenantOutcome:
        today = now.date()

        reason = skip_reason(tenant, today)
        if reason is not None:
            log_skip(tenant.tenant_id, reason)
            return TenantOutcome(tenant_id=tenant.tenant_id, skip_reason=reason)

        action = select_reminder(tenant, today)
        if action is None:
            log_skip(tenant.tenant_id, SKIP_NO_RULE)
            return TenantOutcome(tenant_id=tenant.tenant_id, skip_reason=SKIP_NO_RULE)

        channels = await self._send(tenant, action)
        self.store.apply_reminder_update(tenant.tenant_id, now, action.stage)

        log_reminder_sent(tenant.tenant_id, action.stage, [c.value for c in channels])
        return TenantOutcome(tenant_id=tenant.tenant_id, stage=action.stage)

    async def _send(self, tenant: TenantSnapshot, action: ReminderAction) -> List[Channel]:
        """Send through each preferred channel; email goes first for BOTH"""
        sent = []
        for channel in tenant.channels:
            if channel is Channel.EMAIL:
                if not tenant.email:
                    raise NotifierError(f"Tenant {tenant.tenant_id} has no email address")
                subject = self.subject_template.format(stage=action.stage.value)
                await self.notifier.send_email(
                    tenant.email, subject, action.message, tenant.tenant_id, action.stage
                )
            else:
                if not tenant.phone_number:
                    raise NotifierError(f"Tenant {tenant.tenant_id} has no phone number")
                await self.notifier.send_sms(
                    tenant.phone_number, action.message, tenant.tenant_id, action.stage
                )
            record_reminder(action.stage.value, channel.value)
            sent.append(channel)
        return sent
