#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Middleware classes for Tubelist.

Request logging with timing, and security response headers.
"""

import logging
import time
import uuid

from fastapi import Request, Response, FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from logging_config import StructuredLogger

logger = StructuredLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with its status and duration and adds security headers.

    Also tags the response with an ``X-Request-ID`` header so client reports
    can be matched with server logs.
    """

    SLOW_REQUEST_MS = 10000

    def __init__(self, app: FastAPI):
        super().__init__(app)
        logger.info("RequestLoggingMiddleware initialized.")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process the request, then log its outcome."""
        start_time = time.monotonic()
        path = request.url.path
        method = request.method
        client_ip = request.client.host if request.client else "unknown"
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        is_static = path.startswith(("/static/", "/favicon.ico"))

        status_code = 500  # Default if exception occurs
        try:
            response = await call_next(request)
            status_code = response.status_code

            response.headers["X-Request-ID"] = request_id
            if not is_static:
                response.headers["X-Content-Type-Options"] = "nosniff"
                response.headers["X-Frame-Options"] = "SAMEORIGIN"
                response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            return response

        except Exception as exc:
            logger.error(
                "Exception during request processing",
                path=path, method=method, client_ip=client_ip, request_id=request_id, error=str(exc)
            )
            raise
        finally:
            process_time_ms = (time.monotonic() - start_time) * 1000
            log_msg = {
                "path": path,
                "method": method,
                "status_code": status_code,
                "duration_ms": round(process_time_ms, 2),
                "client_ip": client_ip,
                "request_id": request_id,
            }

            if status_code >= 500:
                log_level = logging.ERROR
            elif status_code >= 400:
                log_level = logging.WARNING
            else:
                log_level = logging.INFO
            logger.logger.log(log_level, "Request completed", extra={"data": log_msg})

            if process_time_ms > self.SLOW_REQUEST_MS:
                logger.warning(f"Slow response: {method} {path}", **log_msg)
