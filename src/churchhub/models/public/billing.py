from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Numeric
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import shared_table_args, utc_now
from src.churchhub.models.enums import PaymentStatus


class Payment(SQLModel, table=True):
    """Subscription payment for a church, billed per member."""

    __tablename__ = "payments"
    __table_args__ = shared_table_args(
        CheckConstraint("method IN ('pix', 'credit_card', 'boleto')", name="ck_payments_method"),
        CheckConstraint(
            "status IN ('pending', 'paid', 'failed', 'cancelled')",
            name="ck_payments_status",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="public.tenants.id", ondelete="CASCADE", index=True)
    amount: Decimal = Field(sa_type=Numeric(10, 2))
    member_count: int
    method: str = Field(max_length=20)
    status: str = Field(default=PaymentStatus.PENDING.value, max_length=20)
    due_date: date
    paid_at: datetime | None = Field(default=None)
    transaction_id: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
