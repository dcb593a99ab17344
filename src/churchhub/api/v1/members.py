"""Member endpoints - scoped to the church the request is routed to."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.churchhub.api.dependencies import AuditServiceDep, CurrentTenant, MemberServiceDep, TenantUser
from src.churchhub.core.security.access import require_permission
from src.churchhub.models.enums import UserRole
from src.churchhub.models.public import AuditAction
from src.churchhub.schemas.member import MemberCreate, MemberRead

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=list[MemberRead])
async def list_members(
    tenant: CurrentTenant,
    user: TenantUser,
    service: MemberServiceDep,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[MemberRead]:
    return await service.list_members(tenant.id, limit=limit, offset=offset)


@router.post("", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def create_member(
    data: MemberCreate,
    tenant: CurrentTenant,
    user: TenantUser,
    service: MemberServiceDep,
    audit_service: AuditServiceDep,
) -> MemberRead:
    """Add a member (leaders and above)."""
    require_permission(user.role, UserRole.LEADER)
    member = await service.create_member(tenant.id, data)
    await audit_service.log_action(
        AuditAction.MEMBER_CREATE,
        entity_type="member",
        entity_id=member.id,
        user_id=user.id,
        tenant_id=tenant.id,
    )
    return member
