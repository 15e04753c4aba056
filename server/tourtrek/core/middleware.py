"""Request id propagation, access logging and request metrics."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .observability import metrics_collector

logger = logging.getLogger(__name__)

QUIET_PATHS = frozenset({"/health", "/metrics", "/favicon.ico"})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it on the response."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for every request outside ``QUIET_PATHS``.

    Feeds the Prometheus request counter and latency histogram, labelled
    with the matched route template rather than the raw path.
    """

    @staticmethod
    def _endpoint_label(request: Request) -> str:
        # Route template keeps ids and emails out of the metric labels
        route = request.scope.get("route")
        return getattr(route, "path", None) or "unmatched"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        context = {
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else None,
        }
        logger.info("Request received", extra=context)

        try:
            response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - started
            metrics_collector.record_request(request.method, self._endpoint_label(request), 500, duration)
            logger.exception("Request crashed", extra=context)
            raise

        duration = time.perf_counter() - started
        metrics_collector.record_request(
            request.method, self._endpoint_label(request), response.status_code, duration
        )

        context.update(status_code=response.status_code, duration_ms=round(duration * 1000, 2))
        if response.status_code >= 500:
            logger.error("Request failed", extra=context)
        elif response.status_code >= 400:
            logger.warning("Request rejected", extra=context)
        else:
            logger.info("Request handled", extra=context)

        return response


def setup_middleware(app, enable_logging: bool = True) -> None:
    """Install request id and (optionally) access logging middleware."""
    # Last added runs first
    if enable_logging:
        app.add_middleware(LoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)
