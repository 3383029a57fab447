# gradverify/core/middleware.py
import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("gradverify.request")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a request-id (client-supplied or generated),
    echoes it in the response headers and logs one access line per request.

    Review decisions copy `request.state.request_id` into the verification log.
    """

    def __init__(self, app, header_name: str = "X-Request-Id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(self.header_name) or uuid.uuid4().hex
        request.state.request_id = rid
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[self.header_name] = rid

        principal = getattr(request.state, "principal", None)
        logger.info(
            "request handled",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                "user_id": principal.user_id if principal else None,
            },
        )
        return response
