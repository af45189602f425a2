"""Middleware for request correlation and access logging."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import REQUEST_ID_HEADER, request_scope, resolve_request_id

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request id to every request and log its outcome."""

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with a request id in context.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response with the X-Request-ID header set
        """
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()

        with request_scope(request_id):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    f"{request.method} {request.url.path} failed",
                    extra={"method": request.method, "path": request.url.path},
                )
                raise

            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
