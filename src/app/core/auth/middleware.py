"""Request id and tenant context middleware."""

import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.core.auth.backend import decode_token


if TYPE_CHECKING:
    from starlette.types import ASGIApp


logger = structlog.get_logger()


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Expose the caller's tenant on ``request.state`` and in log context.

    This only annotates the request; endpoints still enforce the tenant
    through the ``TenantId`` dependency.
    """

    def __init__(
        self,
        app: "ASGIApp",
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or [
            "/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/api/v1/auth/login",
            "/api/v1/auth/register",
            "/api/v1/auth/refresh",
        ]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        token_data = None
        if auth_header and auth_header.startswith("Bearer "):
            token_data = decode_token(auth_header.split(" ", 1)[1])

        if token_data:
            request.state.tenant_id = token_data.tenant_id
            request.state.user_id = token_data.user_id
            structlog.contextvars.bind_contextvars(
                tenant_id=str(token_data.tenant_id),
                user_id=str(token_data.user_id),
            )
        elif header_tenant := request.headers.get("X-Tenant-ID"):
            request.state.tenant_id = header_tenant
            structlog.contextvars.bind_contextvars(tenant_id=header_tenant)

        return await call_next(request)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a request id to state, log context and the X-Request-ID header."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # Alias for error handler

        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        structlog.contextvars.unbind_contextvars("request_id", "tenant_id", "user_id")

        return response
