"""LGPD bookkeeping - consent records and data-subject requests."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import shared_table_args, utc_now
from src.churchhub.models.enums import DataRequestStatus


class ConsentRecord(SQLModel, table=True):
    """Append-only consent ledger.

    A withdrawal is a new row with consent_given=False; the latest row per
    (user, purpose) is the current state.
    """

    __tablename__ = "consent_records"
    __table_args__ = shared_table_args()

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="public.users.id", index=True)
    tenant_id: UUID = Field(foreign_key="public.tenants.id", ondelete="CASCADE")
    purpose: str = Field(max_length=255)  # ConsentPurpose value
    consent_given: bool
    consent_date: datetime = Field(default_factory=utc_now)
    ip_address: str | None = Field(max_length=45, default=None)
    user_agent: str | None = Field(max_length=500, default=None)


class DataRequest(SQLModel, table=True):
    """Data-subject request (access, deletion, portability, rectification)."""

    __tablename__ = "data_requests"
    __table_args__ = shared_table_args(
        CheckConstraint(
            "type IN ('access', 'deletion', 'portability', 'rectification')",
            name="ck_data_requests_type",
        ),
        CheckConstraint(
            "status IN ('pending', 'processing', 'completed', 'denied')",
            name="ck_data_requests_status",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="public.users.id")
    tenant_id: UUID = Field(foreign_key="public.tenants.id", ondelete="CASCADE")
    type: str = Field(max_length=20)  # DataRequestType value
    status: str = Field(default=DataRequestStatus.PENDING.value, max_length=20)
    request_date: datetime = Field(default_factory=utc_now)
    completed_date: datetime | None = Field(default=None)
    notes: str | None = Field(default=None)
