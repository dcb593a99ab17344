"""Member and cell group models - church-scoped entities."""

from datetime import date, datetime, time
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import utc_now


class CellGroup(SQLModel, table=True):
    """Small group that meets outside Sunday service.

    Note: No schema= argument in __table_args__ - the provisioner places
    the table in the church namespace via schema_translate_map.
    """

    __tablename__ = "cell_groups"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(index=True)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    leader_id: UUID  # member id, no FK
    co_leader_id: UUID | None = Field(default=None)
    address: dict[str, Any] = Field(sa_column=Column(JSONB, nullable=False))
    meeting_day: str = Field(max_length=20)
    meeting_time: time
    is_active: bool = Field(default=True)
    max_members: int | None = Field(default=None)
    current_members: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Member(SQLModel, table=True):
    """Church member record. Distinct from login users."""

    __tablename__ = "members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str | None = Field(default=None, max_length=255, index=True)
    phone: str | None = Field(default=None, max_length=20)
    birth_date: date | None = Field(default=None)
    address: dict[str, Any] | None = Field(default=None, sa_column=Column(JSONB, nullable=True))
    photo: str | None = Field(default=None)
    baptism_date: date | None = Field(default=None)
    membership_date: date = Field(default_factory=date.today)
    is_active: bool = Field(default=True)
    cell_group_id: UUID | None = Field(default=None, foreign_key="cell_groups.id", index=True)
    ministries: list[str] | None = Field(
        default=None, sa_column=Column(ARRAY(Text), nullable=True)
    )
    emergency_contact: dict[str, Any] | None = Field(
        default=None, sa_column=Column(JSONB, nullable=True)
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
