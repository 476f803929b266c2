"""Email/SMS notifiers: a logging mock and an HTTP messaging-provider client"""

import logging
from typing import Any, Dict, Protocol

import httpx

from rent_reminder.config import settings
from rent_reminder.domain.exceptions import NotifierError, TenantStoreError
from rent_reminder.domain.models import Channel, DeliveryStatus, ReminderStage

logger = logging.getLogger(__name__)


class AuditLog(Protocol):
    def record(
        self,
        tenant_id: int,
        channel: Channel,
        stage: ReminderStage,
        status: DeliveryStatus,
        content: str,
    ) -> None: ...


def email_content(subject: str, body: str) -> str:
    return f"Subject: {subject}\nBody: {body}"


class MockNotifier:
    """Logs messages instead of sending them; every send succeeds"""

    def __init__(self, audit_log: AuditLog):
        self.audit_log = audit_log

    async def send_email(
        self, address: str, subject: str, body: str, tenant_id: int, stage: ReminderStage
    ) -> None:
        logger.info("[MOCK EMAIL] To: %s | Subject: %s | Body: %s", address, subject, body)
        self.audit_log.record(
            tenant_id, Channel.EMAIL, stage, DeliveryStatus.SENT, email_content(subject, body)
        )

    async def send_sms(self, number: str, body: str, tenant_id: int, stage: ReminderStage) -> None:
        logger.info("[MOCK SMS] To: %s | Message: %s", number, body)
        self.audit_log.record(tenant_id, Channel.SMS, stage, DeliveryStatus.SENT, body)


class HttpNotifier:
    """Client for an external messaging provider (single attempt, no retries)"""

    def __init__(self, audit_log: AuditLog, base_url: str | None = None, timeout: float | None = None):
        self.audit_log = audit_log
        self.base_url = base_url or settings.messaging_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def _post(self, path: str, payload: Dict[str, Any]) -> None:
        """
        POST one message to the provider.

        Raises:
            NotifierError: On timeout, network or HTTP errors
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(f"{self.base_url}{path}", json=payload)
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise NotifierError(f"Messaging API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise NotifierError(f"Messaging API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise NotifierError(f"Messaging API unreachable: {e}") from e

    async def _deliver(
        self,
        path: str,
        payload: Dict[str, Any],
        channel: Channel,
        tenant_id: int,
        stage: ReminderStage,
        content: str,
    ) -> None:
        try:
            await self._post(path, payload)
        except NotifierError as delivery_error:
            try:
                self.audit_log.record(tenant_id, channel, stage, DeliveryStatus.FAILED, content)
            except TenantStoreError as e:
                # the delivery failure is what the tenant outcome reports
                logger.error(
                    "Could not audit failed delivery",
                    extra={"tenant_id": tenant_id, "channel": channel.value, "error": str(e)},
                )
            raise delivery_error
        self.audit_log.record(tenant_id, channel, stage, DeliveryStatus.SENT, content)

    async def send_email(
        self, address: str, subject: str, body: str, tenant_id: int, stage: ReminderStage
    ) -> None:
        payload = {
            "to": address,
            "subject": subject,
            "body": body,
            "tenant_id": tenant_id,
            "stage": stage.value,
        }
        await self._deliver(
            "/email", payload, Channel.EMAIL, tenant_id, stage, email_content(subject, body)
        )

    async def send_sms(self, number: str, body: str, tenant_id: int, stage: ReminderStage) -> None:
        payload = {"to": number, "body": body, "tenant_id": tenant_id, "stage": stage.value}
        await self._deliver("/sms", payload, Channel.SMS, tenant_id, stage, body)


def build_notifier(audit_log: AuditLog) -> MockNotifier | HttpNotifier:
    """Notifier selected by settings.notifier_backend ("mock" or "http")"""
    if settings.notifier_backend == "http":
        return HttpNotifier(audit_log)
    return MockNotifier(audit_log)
