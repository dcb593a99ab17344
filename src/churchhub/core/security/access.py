"""Role and tenant access checks.

Pure functions with no I/O. Roles are ranked; a role satisfies every
requirement at or below its own rank.
"""

from typing import Final
from uuid import UUID

from src.churchhub.core.exceptions import UnauthorizedError
from src.churchhub.models.enums import UserRole

ROLE_RANKS: Final[dict[UserRole, int]] = {
    UserRole.SUPER_ADMIN: 6,
    UserRole.CHURCH_ADMIN: 5,
    UserRole.PASTOR: 4,
    UserRole.LEADER: 3,
    UserRole.MEMBER: 2,
    UserRole.VISITOR: 1,
}


def role_rank(role: UserRole | str) -> int:
    """Rank of a role. Raises ValueError for unknown role names."""
    return ROLE_RANKS[UserRole(role)]


def has_permission(role: UserRole | str, required_role: UserRole | str) -> bool:
    """Check that `role` ranks at or above `required_role`."""
    return role_rank(role) >= role_rank(required_role)


def can_access_tenant(
    role: UserRole | str,
    user_tenant_id: UUID | None,
    target_tenant_id: UUID | None,
) -> bool:
    """Check whether a user may act inside the target church.

    Super admins reach every church. Everyone else only reaches their own;
    a missing tenant association never matches.
    """
    if UserRole(role) == UserRole.SUPER_ADMIN:
        return True
    if user_tenant_id is None or target_tenant_id is None:
        return False
    return user_tenant_id == target_tenant_id


def require_permission(role: UserRole | str, required_role: UserRole | str) -> None:
    if not has_permission(role, required_role):
        raise UnauthorizedError()


def require_tenant_access(
    role: UserRole | str,
    user_tenant_id: UUID | None,
    target_tenant_id: UUID | None,
) -> None:
    if not can_access_tenant(role, user_tenant_id, target_tenant_id):
        raise UnauthorizedError()
