"""Church registration and administration endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status
from starlette.requests import Request

from src.churchhub.api.dependencies import (
    ChurchServiceDep,
    CurrentUser,
    RegistrationServiceDep,
    Resolver,
)
from src.churchhub.core.config import get_settings
from src.churchhub.core.exceptions import TenantNotFoundError, ValidationError
from src.churchhub.core.rate_limit import limiter
from src.churchhub.schemas.church import (
    ChurchRead,
    ChurchRegisterRequest,
    ChurchRegisterResponse,
    ProvisionResponse,
    RepairResponse,
)
from src.churchhub.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/churches", tags=["churches"])


@router.post(
    "/register",
    response_model=ChurchRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Subdomain or admin email already in use"},
        422: {"description": "Invalid registration data"},
    },
)
@limiter.limit(lambda: get_settings().registration_rate_limit)
async def register_church(
    request: Request,
    data: ChurchRegisterRequest,
    service: RegistrationServiceDep,
) -> ChurchRegisterResponse:
    """Register a church with its admin user.

    The church namespace is provisioned right after the registration commits.
    When that step fails the church still exists and `namespace_ready` is false;
    POST /churches/{id}/provision repairs it.
    """
    result = await service.register_church(data)
    return ChurchRegisterResponse(
        church=ChurchRead.model_validate(result.tenant),
        admin_user_id=result.admin_user.id,
        namespace_ready=result.namespace_ready,
    )


@router.get(
    "/by-subdomain/{subdomain}",
    response_model=ChurchRead,
    responses={404: {"description": "Church not found or inactive"}},
)
async def get_church_by_subdomain(subdomain: str, resolver: Resolver) -> ChurchRead:
    tenant = await resolver.resolve_tenant(subdomain)
    if tenant is None:
        raise TenantNotFoundError()
    return ChurchRead.model_validate(tenant)


@router.get("", response_model=PaginatedResponse[ChurchRead])
async def list_churches(
    user: CurrentUser,
    service: ChurchServiceDep,
    cursor: Annotated[str | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse[ChurchRead]:
    """List all churches (super admin only)."""
    try:
        items, next_cursor, has_more = await service.list_churches(user, cursor, limit)
    except ValueError as e:
        raise ValidationError("Invalid cursor", field="cursor") from e
    return PaginatedResponse(
        items=[ChurchRead.model_validate(t) for t in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("/repair", response_model=RepairResponse)
async def repair_missing_namespaces(user: CurrentUser, service: ChurchServiceDep) -> RepairResponse:
    """Provision every active church that has no namespace (super admin only)."""
    repaired = await service.repair_missing_namespaces(user)
    return RepairResponse(repaired=repaired)


@router.post("/{tenant_id}/provision", response_model=ProvisionResponse)
async def provision_church(
    tenant_id: UUID, user: CurrentUser, service: ChurchServiceDep
) -> ProvisionResponse:
    """Re-run namespace provisioning for one church. Idempotent."""
    schema_name = await service.repair_namespace(tenant_id, user)
    return ProvisionResponse(tenant_id=tenant_id, schema_name=schema_name)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_church(tenant_id: UUID, user: CurrentUser, service: ChurchServiceDep) -> Response:
    """Deactivate a church and drop its namespace (super admin only)."""
    await service.delete_church(tenant_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
