from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class MemberCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    birth_date: date | None = None
    baptism_date: date | None = None
    cell_group_id: UUID | None = None


class MemberRead(BaseModel):
    id: UUID
    tenant_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    baptism_date: date | None = None
    membership_date: date
    is_active: bool
    cell_group_id: UUID | None = None
    created_at: datetime
