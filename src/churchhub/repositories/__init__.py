"""Repository layer - data access abstraction."""

from src.churchhub.repositories.base import BaseRepository
from src.churchhub.repositories.public import (
    AuditLogRepository,
    ConsentRecordRepository,
    DataRequestRepository,
    TenantRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository",
    "AuditLogRepository",
    "ConsentRecordRepository",
    "DataRequestRepository",
    "TenantRepository",
    "UserRepository",
]
