"""
Per-request context middleware.

Assigns an X-Request-ID to each request (preserving one sent by the client),
binds it into the structlog context for the duration of the request, and
stamps X-API-Version on every response.
"""

import uuid
from contextvars import ContextVar

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
API_VERSION_HEADER = "X-API-Version"

request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID from context."""
    return request_id_context.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag requests with an ID and responses with the API version."""

    def __init__(self, app, version: str) -> None:
        """
        Args:
            app: The ASGI application.
            version: Value for the X-API-Version header.
        """
        super().__init__(app)
        self.version = version

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_context.set(request_id)

        try:
            request.state.request_id = request_id
            with structlog.contextvars.bound_contextvars(request_id=request_id):
                response = await call_next(request)

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[API_VERSION_HEADER] = self.version
            return response
        finally:
            request_id_context.reset(token)
