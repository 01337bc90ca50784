"""Request-scoped profiler middleware."""

import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bouncer.utils.profiler import LoggingProfiler


class ProfilerMiddleware(BaseHTTPMiddleware):
    """Attaches a LoggingProfiler to every request as ``request.state.profiler``."""

    def __init__(self, app: Any, slow_span_threshold: float = 0.5):
        """
        Initialize profiler middleware.

        Args:
            app: ASGI application
            slow_span_threshold: Spans slower than this are logged as warnings (seconds)
        """
        super().__init__(app)
        self.slow_threshold = slow_span_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        profiler = LoggingProfiler(request_id=request_id, slow_span_threshold=self.slow_threshold)
        request.state.profiler = profiler

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Authorization-Checks"] = str(len(profiler.spans))
        return response
