"""Public schema models - Lobby Pattern.

The church registry, identities and LGPD bookkeeping live here.
Church-owned data models go in models/tenant/.
"""

from src.churchhub.models.public.audit import AuditAction, AuditLog
from src.churchhub.models.public.billing import Payment
from src.churchhub.models.public.privacy import ConsentRecord, DataRequest
from src.churchhub.models.public.tenant import Tenant
from src.churchhub.models.public.user import User

# Creation order for the control plane (FK dependencies first)
SHARED_TABLES = [
    Tenant.__table__,  # type: ignore[attr-defined]
    User.__table__,  # type: ignore[attr-defined]
    Payment.__table__,  # type: ignore[attr-defined]
    AuditLog.__table__,  # type: ignore[attr-defined]
    ConsentRecord.__table__,  # type: ignore[attr-defined]
    DataRequest.__table__,  # type: ignore[attr-defined]
]

__all__ = [
    "SHARED_TABLES",
    "AuditAction",
    "AuditLog",
    "ConsentRecord",
    "DataRequest",
    "Payment",
    "Tenant",
    "User",
]
