"""SQLAlchemy ORM models for tenants and the communication audit log"""

from sqlalchemy import BigInteger, Boolean, Column, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Tenant(Base):
    """Tenant record with rent terms and reminder state"""

    __tablename__ = "tenant"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    phone_number = Column(Text, nullable=True)
    property_name = Column(Text, nullable=False)
    unit_number = Column(Text, nullable=False)
    monthly_rent_cents = Column(BigInteger, nullable=False)
    rent_due_day = Column(Integer, nullable=False)
    lease_start_date = Column(Date, nullable=True)
    lease_end_date = Column(Date, nullable=True)
    preferred_contact_method = Column(Text, nullable=False, default="EMAIL")
    opted_out = Column(Boolean, nullable=False, default=False)
    last_payment_date = Column(DateTime(timezone=True), nullable=True)
    last_payment_amount_cents = Column(BigInteger, nullable=True)
    balance_owing_cents = Column(BigInteger, nullable=False, default=0)
    status = Column(Text, nullable=False, default="PAID")
    last_message_sent = Column(DateTime(timezone=True), nullable=True)
    reminder_stage = Column(Text, nullable=False, default="PRE_DUE")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    communications = relationship(
        "CommunicationLog", back_populates="tenant", cascade="all, delete-orphan"
    )


class CommunicationLog(Base):
    """One row per message attempt (audit only)"""

    __tablename__ = "communication_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id", ondelete="CASCADE"), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    channel = Column(Text, nullable=False)
    message_type = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    content = Column(Text, nullable=True)

    tenant = relationship("Tenant", back_populates="communications")
