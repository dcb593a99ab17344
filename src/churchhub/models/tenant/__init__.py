"""Tenant-schema models.

This package contains SQLModel tables that exist in every church namespace.
They carry no schema; the provisioner creates them with a schema_translate_map
and queries reach them through search_path.
"""

from src.churchhub.models.tenant.members import CellGroup, Member
from src.churchhub.models.tenant.messaging import ChatMessage, Notification
from src.churchhub.models.tenant.worship import (
    Setlist,
    SetlistSong,
    Song,
    WorshipTeam,
    WorshipTeamMember,
)

# cell_groups precedes members because members.cell_group_id references it
TENANT_TABLES = [
    CellGroup.__table__,  # type: ignore[attr-defined]
    Member.__table__,  # type: ignore[attr-defined]
    WorshipTeam.__table__,  # type: ignore[attr-defined]
    WorshipTeamMember.__table__,  # type: ignore[attr-defined]
    Song.__table__,  # type: ignore[attr-defined]
    Setlist.__table__,  # type: ignore[attr-defined]
    SetlistSong.__table__,  # type: ignore[attr-defined]
    ChatMessage.__table__,  # type: ignore[attr-defined]
    Notification.__table__,  # type: ignore[attr-defined]
]

__all__ = [
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
