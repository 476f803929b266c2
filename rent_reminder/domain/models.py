"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from rent_reminder.domain.exceptions import ErrorKind


class ReminderStage(str, Enum):
    """Stage of the most recent reminder sent to a tenant"""

    PRE_DUE = "PRE_DUE"
    DUE = "DUE"
    LATE_1 = "LATE_1"
    LATE_2 = "LATE_2"
    FINAL = "FINAL"


class ContactMethod(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    BOTH = "BOTH"


class Channel(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"


class DeliveryStatus(str, Enum):
    SENT = "SENT"
    FAILED = "FAILED"


class TenantStatus(str, Enum):
    PAID = "PAID"
    LATE = "LATE"
    PARTIAL = "PARTIAL"
    DELINQUENT = "DELINQUENT"


CHANNELS_BY_METHOD = {
    ContactMethod.EMAIL: (Channel.EMAIL,),
    ContactMethod.SMS: (Channel.SMS,),
    ContactMethod.BOTH: (Channel.EMAIL, Channel.SMS),
}


@dataclass(frozen=True)
class TenantSnapshot:
    """Read-only view of a tenant consumed by one reminder pass"""

    tenant_id: int
    rent_due_day: int  # 1-31
    monthly_rent_cents: int
    balance_owing_cents: int
    opted_out: bool = False
    lease_end_date: Optional[date] = None
    last_message_sent: Optional[datetime] = None
    reminder_stage: ReminderStage = ReminderStage.PRE_DUE
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def channels(self) -> tuple[Channel, ...]:
        return CHANNELS_BY_METHOD[self.preferred_contact_method]


@dataclass(frozen=True)
class ReminderAction:
    """A reminder the classifier decided to send"""

    stage: ReminderStage
    message: str


@dataclass
class TenantOutcome:
    """Result of processing one tenant during a pass"""

    tenant_id: int
    stage: Optional[ReminderStage] = None
    skip_reason: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def status(self) -> str:
        if self.error_kind is not None:
            return "error"
        if self.stage is not None:
            return "sent"
        return "skipped"


@dataclass
class RunSummary:
    """Counts for one daily pass (observability only)"""

    run_date: date
    outcomes: List[TenantOutcome] = field(default_factory=list)
    aborted_reason: Optional[str] = None

    @property
    def evaluated(self) -> int:
        return len(self.outcomes)

    @property
    def sent(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "sent")

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def errored(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "error")


@dataclass
class NewTenant:
    """Tenant creation data"""

    full_name: str
    email: str
    phone_number: str
    property_name: str
    unit_number: str
    monthly_rent_cents: int
    rent_due_day: int
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL
    notes: Optional[str] = None


@dataclass(frozen=True)
class PaymentResult:
    """State transition produced by recording a payment"""

    balance_owing_cents: int
    status: TenantStatus
    reminder_stage: ReminderStage
