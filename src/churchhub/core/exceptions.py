"""Domain errors and exception handlers with request_id in responses."""

from uuid import UUID

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.churchhub.core.logging import get_logger

logger = get_logger(__name__)


class ChurchHubError(Exception):
    """Base exception for ChurchHub domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ChurchHubError):
    """Input failed a format or business rule."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid input"

    def __init__(self, detail: str | None = None, field: str | None = None) -> None:
        super().__init__(detail)
        self.field = field


class ConflictError(ChurchHubError):
    """A unique value (subdomain, email) is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"

    def __init__(self, detail: str | None = None, field: str | None = None) -> None:
        super().__init__(detail)
        self.field = field


class NotFoundError(ChurchHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class TenantNotFoundError(NotFoundError):
    """No active church answers to the routing key."""

    default_detail = "Church not found"


class NamespaceNotFoundError(NotFoundError):
    """The church's schema does not exist (dropped or never provisioned)."""

    default_detail = "Church data is not available"

    def __init__(self, tenant_id: UUID, detail: str | None = None) -> None:
        super().__init__(detail)
        self.tenant_id = tenant_id


class UnauthorizedError(ChurchHubError):
    """Role or tenant check failed.

    The message is deliberately generic so it never reveals whether
    another church exists.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class TransientStoreError(ChurchHubError):
    """Database unreachable or pool exhausted. Safe to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable"


class PartialProvisioningError(ChurchHubError):
    """Church registered but its namespace could not be provisioned.

    Recorded on the registration result and logged. Never raised to HTTP
    callers; the repair path re-runs provisioning.
    """

    default_detail = "Church namespace provisioning failed"

    def __init__(self, tenant_id: UUID, cause: BaseException | None = None) -> None:
        super().__init__(f"Namespace provisioning failed for tenant {tenant_id}")
        self.tenant_id = tenant_id
        self.cause = cause


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(ChurchHubError)
    async def churchhub_exception_handler(request: Request, exc: ChurchHubError) -> JSONResponse:
        request_id = correlation_id.get()
        if exc.status_code >= 500:
            logger.warning(
                "Request failed",
                error=type(exc).__name__,
                detail=exc.detail,
                path=request.url.path,
            )
        content: dict[str, object] = {"detail": exc.detail, "request_id": request_id}
        field = getattr(exc, "field", None)
        if field:
            content["field"] = field
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": jsonable_errors(exc),
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Strip non-serializable context (e.g. the raised ValueError) from pydantic errors."""
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "loc": list(error.get("loc", ())),
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
        )
    return errors
