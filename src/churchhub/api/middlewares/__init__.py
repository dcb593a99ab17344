"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.churchhub.core.config import Settings

from .logging_context import logging_context_middleware
from .request_metadata import request_metadata_middleware

__all__ = [
    "setup_middlewares",
    "logging_context_middleware",
    "request_metadata_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middleware order matters - the last one added is the outermost.
    """
    # Request metadata - client IP and user agent for audit/consent rows
    @app.middleware("http")
    async def _request_metadata(request, call_next):  # type: ignore[no-untyped-def]
        return await request_metadata_middleware(request, call_next)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Church-Subdomain", "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID, must wrap everything above
    app.add_middleware(CorrelationIdMiddleware)
