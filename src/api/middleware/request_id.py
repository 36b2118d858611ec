"""Request ID tracking middleware."""

import uuid
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to the request, the log context and the response.

    A client-supplied ID is reused unless it is empty or oversized.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
        if not incoming or len(incoming) > MAX_REQUEST_ID_LENGTH:
            incoming = str(uuid.uuid4())
        request.state.request_id = incoming

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=incoming)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = incoming

        return response
