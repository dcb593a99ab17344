"""Model exports - Lobby Pattern.

Import from here: `from src.churchhub.models import User, Tenant`
"""

# Enums
from src.churchhub.models.enums import (
    ConsentPurpose,
    DataRequestStatus,
    DataRequestType,
    SubscriptionStatus,
    UserRole,
)

# Public schema models
from src.churchhub.models.public import (
    SHARED_TABLES,
    AuditAction,
    AuditLog,
    ConsentRecord,
    DataRequest,
    Payment,
    Tenant,
    User,
)

# Tenant schema models
from src.churchhub.models.tenant import (
    TENANT_TABLES,
    CellGroup,
    ChatMessage,
    Member,
    Notification,
    Setlist,
    SetlistSong,
    Song,
    WorshipTeam,
    WorshipTeamMember,
)

__all__ = [
    # Enums
    "ConsentPurpose",
    "DataRequestStatus",
    "DataRequestType",
    "SubscriptionStatus",
    "UserRole",
    # Public schema models
    "SHARED_TABLES",
    "AuditAction",
    "AuditLog",
    "ConsentRecord",
    "DataRequest",
    "Payment",
    "Tenant",
    "User",
    # Tenant schema models
    "TENANT_TABLES",
    "CellGroup",
    "ChatMessage",
    "Member",
    "Notification",
    "Setlist",
    "SetlistSong",
    "Song",
    "WorshipTeam",
    "WorshipTeamMember",
]
