"""Public schema repositories.

Church-owned data is not reached through repositories; it goes through
the tenant-scoped query executor.
"""

from src.churchhub.repositories.public.audit import AuditLogRepository
from src.churchhub.repositories.public.privacy import (
    ConsentRecordRepository,
    DataRequestRepository,
)
from src.churchhub.repositories.public.tenant import TenantRepository
from src.churchhub.repositories.public.user import UserRepository

__all__ = [
    "AuditLogRepository",
    "ConsentRecordRepository",
    "DataRequestRepository",
    "TenantRepository",
    "UserRepository",
]
