"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.churchhub.api.dependencies import AuthServiceDep, CurrentUser, RoutingKey
from src.churchhub.core.config import get_settings
from src.churchhub.core.rate_limit import limiter
from src.churchhub.schemas.auth import LoginRequest, LoginResponse, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid credentials"}},
)
@limiter.limit(lambda: get_settings().login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    routing_key: RoutingKey,
    service: AuthServiceDep,
) -> LoginResponse:
    """Authenticate and return an access token.

    Church users sign in through their church's subdomain (body field,
    X-Church-Subdomain header or Host). Super admins may omit it.
    """
    result = await service.authenticate(
        login_data.email,
        login_data.password,
        login_data.subdomain or routing_key,
    )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result


@router.get("/me", response_model=UserRead)
async def me(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)
