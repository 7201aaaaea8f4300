"""
Blog API Backend - Request Logging Middleware
==============================================

What:  One access-log line for every HTTP request.
How:   Measures the time spent downstream and logs method, path, status,
       duration, request ID and the authenticated user (if any).
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Request bodies and the Authorization header are never logged. The username
comes from `request.state.username`, set by the auth gate on mutating routes;
anonymous requests log "-".
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("blogapi.access")

ANONYMOUS = "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    An exception escaping the app is logged as a 500 here and re-raised; the
    catch-all handler outside the middleware chain renders the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, start_time)
            raise

        self._log(request, response.status_code, start_time)
        return response

    def _log(self, request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        username = getattr(request.state, "username", None) or ANONYMOUS
        rid = request_id_var.get("")

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            username,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "username": username,
                "client_ip": client_ip,
            },
        )
