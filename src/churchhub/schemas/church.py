from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.churchhub.core.security.validators import (
    MAX_SUBDOMAIN_LENGTH,
    is_reserved_subdomain,
    normalize_subdomain,
    validate_subdomain_format,
)

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128


class ChurchRegisterRequest(BaseModel):
    """Registration creates the church, its admin user and LGPD consents."""

    name: str = Field(min_length=1, max_length=255)
    subdomain: str = Field(
        min_length=1,
        max_length=MAX_SUBDOMAIN_LENGTH,
        json_schema_extra={
            "examples": ["graca", "nova-vida"],
            "description": "Lowercase letters, numbers and hyphens. Immutable.",
        },
    )
    address: str = Field(default="", max_length=500)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr
    admin_name: str = Field(min_length=1, max_length=255)
    admin_email: EmailStr
    admin_password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)
    confirm_password: str
    accept_terms: bool
    accept_privacy: bool

    @field_validator("subdomain", mode="before")
    @classmethod
    def lowercase_subdomain(cls, v: object) -> object:
        return normalize_subdomain(v) if isinstance(v, str) else v

    @field_validator("subdomain")
    @classmethod
    def validate_subdomain(cls, v: str) -> str:
        validate_subdomain_format(v)
        if is_reserved_subdomain(v):
            raise ValueError(f"Subdomain '{v}' is reserved")
        return v

    @field_validator("email", "admin_email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("accept_terms", "accept_privacy")
    @classmethod
    def must_accept(cls, v: bool) -> bool:
        if not v:
            raise ValueError("Terms of use and privacy policy must be accepted")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "ChurchRegisterRequest":
        if self.admin_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ChurchRead(BaseModel):
    id: UUID
    name: str
    subdomain: str
    address: str
    phone: str | None = None
    email: str
    is_active: bool
    subscription_status: str
    member_count: int
    monthly_fee: Decimal
    admin_user_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ChurchRegisterResponse(BaseModel):
    church: ChurchRead
    admin_user_id: UUID
    namespace_ready: bool
    message: str = "Church registered"


class ProvisionResponse(BaseModel):
    tenant_id: UUID
    schema_name: str


class RepairResponse(BaseModel):
    repaired: list[UUID]
