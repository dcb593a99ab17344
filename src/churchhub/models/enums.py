"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """User role, ordered from most to least privileged."""

    SUPER_ADMIN = "super_admin"
    CHURCH_ADMIN = "church_admin"
    PASTOR = "pastor"
    LEADER = "leader"
    MEMBER = "member"
    VISITOR = "visitor"


class SubscriptionStatus(str, Enum):
    """Church subscription lifecycle."""

    TRIAL = "trial"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class PaymentMethod(str, Enum):
    PIX = "pix"
    CREDIT_CARD = "credit_card"
    BOLETO = "boleto"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ConsentPurpose(str, Enum):
    """Processing purposes a church admin consents to at registration (LGPD)."""

    CHURCH_MANAGEMENT = "church_management"
    MEMBER_COMMUNICATION = "member_communication"
    REPORTS_AND_STATISTICS = "reports_and_statistics"
    BILLING = "billing"


class DataRequestType(str, Enum):
    """LGPD data-subject request types."""

    ACCESS = "access"
    DELETION = "deletion"
    PORTABILITY = "portability"
    RECTIFICATION = "rectification"


class DataRequestStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    DENIED = "denied"


class SongDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ChatMessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
