from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    subdomain: str | None = Field(
        default=None,
        description="Church routing key. Omit only for super admins.",
    )


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    id: UUID
    email: str
    name: str
    role: str
    tenant_id: UUID | None = None
    is_active: bool
    last_login: datetime | None = None

    model_config = {"from_attributes": True}
