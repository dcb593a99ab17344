"""Authentication and authorization dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.churchhub.api.dependencies.repositories import UserRepo
from src.churchhub.api.dependencies.tenant import CurrentTenant
from src.churchhub.core.logging import bind_user_context
from src.churchhub.core.security import decode_token
from src.churchhub.core.security.access import require_tenant_access
from src.churchhub.models.public import User


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer token and load the active user it names."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None or payload.get("type") != "access":
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        raise _unauthorized("Invalid token payload") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    bind_user_context(user.id, user.role, user.tenant_id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_tenant_user(user: CurrentUser, tenant: CurrentTenant) -> User:
    """Current user, checked against the church the request is routed to."""
    require_tenant_access(user.role, user.tenant_id, tenant.id)
    return user


TenantUser = Annotated[User, Depends(get_tenant_user)]
