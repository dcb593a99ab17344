"""Audit log model for tracking control-plane actions."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import shared_table_args, utc_now


class AuditAction(str, Enum):
    """Audit action types for type-safe logging."""

    # Auth
    USER_LOGIN = "user.login"

    # Church
    TENANT_CREATE = "tenant.create"
    TENANT_PROVISION = "tenant.provision"
    TENANT_DELETE = "tenant.delete"

    # Members
    MEMBER_CREATE = "member.create"

    # Privacy
    CONSENT_WITHDRAW = "consent.withdraw"
    DATA_REQUEST_CREATE = "data_request.create"


class AuditLog(SQLModel, table=True):
    """Append-only audit trail.

    Stored in public schema for centralized querying and compliance audits.
    """

    __tablename__ = "audit_logs"
    __table_args__ = shared_table_args(
        Index("ix_audit_logs_tenant_created", "tenant_id", "created_at"),
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Context
    user_id: UUID = Field(foreign_key="public.users.id", index=True)
    tenant_id: UUID | None = Field(
        default=None,
        foreign_key="public.tenants.id",
        ondelete="SET NULL",
        index=True,
    )

    # Action details
    action: str = Field(max_length=255)  # AuditAction value
    entity_type: str = Field(max_length=100)  # "tenant", "user", "member", "consent"
    entity_id: UUID

    # Change tracking
    old_values: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )
    new_values: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )

    # Request metadata
    ip_address: str | None = Field(max_length=45, default=None)  # IPv4/IPv6
    user_agent: str | None = Field(max_length=500, default=None)

    created_at: datetime = Field(default_factory=utc_now)
