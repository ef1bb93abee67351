"""
Request ID middleware

Tags every MOTD request with a correlation ID so the fetch, parse and
render log lines of one poll can be grouped. Uses structlog contextvars.
"""

import uuid
import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests for tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        # Untrusted header ends up in every log line, keep it short
        if not request_id or len(request_id) > MAX_REQUEST_ID_LENGTH:
            request_id = uuid.uuid4().hex

        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
