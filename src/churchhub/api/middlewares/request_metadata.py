"""Captures client IP and user agent for audit and consent records."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.churchhub.core.request_metadata import (
    RequestMetadata,
    clear_request_metadata,
    get_client_ip,
    set_request_metadata,
)


async def request_metadata_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    clear_request_metadata()

    client_host = request.client.host if request.client else None
    set_request_metadata(
        RequestMetadata.build(
            ip_address=get_client_ip(request.headers.get("x-forwarded-for"), client_host),
            user_agent=request.headers.get("user-agent"),
            request_id=correlation_id.get(),
        )
    )
    try:
        return await call_next(request)
    finally:
        clear_request_metadata()
