"""User model - centralized in public schema (Lobby Pattern)."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import shared_table_args, utc_now
from src.churchhub.models.enums import UserRole


class User(SQLModel, table=True):
    """User model - centralized in public schema (Lobby Pattern).

    Emails are unique system-wide and stored lowercase. Every role except
    super_admin is bound to exactly one church through tenant_id.
    """

    __tablename__ = "users"
    __table_args__ = shared_table_args(
        CheckConstraint(
            "role IN ('super_admin', 'church_admin', 'pastor', 'leader', 'member', 'visitor')",
            name="ck_users_role",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    name: str = Field(max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    avatar: str | None = Field(default=None)
    role: str = Field(default=UserRole.MEMBER.value, max_length=50)
    tenant_id: UUID | None = Field(
        default=None,
        foreign_key="public.tenants.id",
        ondelete="SET NULL",
        index=True,
    )
    is_active: bool = Field(default=True)
    last_login: datetime | None = Field(default=None)
    two_factor_enabled: bool = Field(default=False)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
