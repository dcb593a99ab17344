"""Church (tenant) model - registry in public schema."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Numeric
from sqlmodel import Field, SQLModel

from src.churchhub.core.security.validators import MAX_SUBDOMAIN_LENGTH, tenant_schema_name
from src.churchhub.models.base import shared_table_args, utc_now
from src.churchhub.models.enums import SubscriptionStatus


class Tenant(SQLModel, table=True):
    """Church registry in public schema.

    The subdomain is the routing key and is immutable after registration.
    Each row owns one namespace named after its id (see `schema_name`).
    """

    __tablename__ = "tenants"
    __table_args__ = shared_table_args(
        CheckConstraint(
            "subscription_status IN ('trial', 'active', 'inactive', 'suspended')",
            name="ck_tenants_subscription_status",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    subdomain: str = Field(max_length=MAX_SUBDOMAIN_LENGTH, unique=True, index=True)
    address: str = Field(max_length=500)
    phone: str | None = Field(default=None, max_length=20)
    email: str = Field(max_length=255)  # contact address, not a login
    is_active: bool = Field(default=True)
    subscription_status: str = Field(default=SubscriptionStatus.TRIAL.value, max_length=20)
    member_count: int = Field(default=0)
    monthly_fee: Decimal = Field(default=Decimal("0.00"), sa_type=Numeric(10, 2))
    admin_user_id: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def schema_name(self) -> str:
        """Get the namespace name for this church.

        Returns:
            Schema name in format 'tenant_{uuid hex}'
        """
        return tenant_schema_name(self.id)
