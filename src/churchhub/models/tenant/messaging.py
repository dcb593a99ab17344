"""Chat and notification storage. Delivery is handled elsewhere."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.churchhub.models.base import utc_now
from src.churchhub.models.enums import ChatMessageType, NotificationType


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"
    __table_args__ = (
        CheckConstraint(
            "type IN ('text', 'image', 'file', 'system')", name="ck_chat_messages_type"
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    sender_id: UUID
    receiver_id: UUID | None = Field(default=None)
    group_id: UUID | None = Field(default=None, index=True)
    content: str
    type: str = Field(default=ChatMessageType.TEXT.value, max_length=20)
    file_url: str | None = Field(default=None)
    file_name: str | None = Field(default=None)
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('info', 'warning', 'error', 'success')", name="ck_notifications_type"
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID
    user_id: UUID = Field(index=True)
    title: str = Field(max_length=255)
    message: str
    type: str = Field(default=NotificationType.INFO.value, max_length=20)
    is_read: bool = Field(default=False)
    action_url: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
