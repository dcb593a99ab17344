from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.churchhub.models.enums import DataRequestType


class ConsentRead(BaseModel):
    id: UUID
    purpose: str
    consent_given: bool
    consent_date: datetime

    model_config = {"from_attributes": True}


class DataRequestCreate(BaseModel):
    type: DataRequestType
    notes: str | None = Field(default=None, max_length=2000)


class DataRequestRead(BaseModel):
    id: UUID
    type: str
    status: str
    request_date: datetime
    completed_date: datetime | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}
