"""
HTTP Request Logging Middleware

A Starlette `BaseHTTPMiddleware` that logs every inbound request once it
completes, in the compact "METHOD path status duration" form. Request id,
client IP and user agent are attached as Loguru bindings.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger


def _client_ip(request: Request) -> str:
    xfwd = request.headers.get("x-forwarded-for")
    if xfwd:
        return xfwd.split(",")[0].strip()
    return request.client.host if request.client else ""


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs request completion with status and duration, and unhandled exceptions."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        method = request.method
        path = request.url.path

        ctx_logger = logger.bind(
            request_id=rid,
            method=method,
            path=path,
            client_ip=_client_ip(request),
            user_agent=request.headers.get("user-agent", ""),
        )
        request.state.request_id = rid

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000.0
            ctx_logger.bind(duration_ms=round(duration_ms, 2)).exception(
                f"{method} {path} failed after {duration_ms:.1f} ms"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000.0
        response.headers["x-request-id"] = rid
        ctx_logger.bind(status=response.status_code, duration_ms=round(duration_ms, 2)).info(
            f"{method} {path} {response.status_code} {duration_ms:.1f} ms"
        )
        return response
