"""Profiler contract and a logging-backed implementation."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ProfilerSpan(Protocol):
    """A started span. Calling ``end`` records it."""

    def end(self, data: dict[str, Any] | None = None) -> None: ...


class Profiler(Protocol):
    """Anything able to open named spans."""

    def create(self, label: str, data: dict[str, Any] | None = None) -> ProfilerSpan: ...


@contextmanager
def profile(profiler: Profiler | None, label: str, data: dict[str, Any] | None = None) -> Iterator[None]:
    """Wrap a block in a span when a profiler is attached."""
    if profiler is None:
        yield
        return

    span = profiler.create(label, data)
    try:
        yield
    finally:
        span.end()


class LoggingSpan:
    """Span that logs its duration when ended."""

    def __init__(self, profiler: "LoggingProfiler", label: str, data: dict[str, Any] | None = None):
        self.profiler = profiler
        self.label = label
        self.data = dict(data or {})
        self.start_time = time.perf_counter()
        self.duration: float | None = None

    def end(self, data: dict[str, Any] | None = None) -> None:
        if self.duration is not None:
            return

        self.duration = time.perf_counter() - self.start_time
        if data:
            self.data.update(data)
        self.profiler.record(self)


class LoggingProfiler:
    """Collects spans for one unit of work and logs each one."""

    def __init__(self, request_id: str | None = None, slow_span_threshold: float = 0.5):
        """
        Initialize logging profiler.

        Args:
            request_id: Identifier attached to every logged span
            slow_span_threshold: Spans slower than this are logged as warnings (seconds)
        """
        self.request_id = request_id
        self.slow_threshold = slow_span_threshold
        self.spans: list[LoggingSpan] = []

    def create(self, label: str, data: dict[str, Any] | None = None) -> LoggingSpan:
        return LoggingSpan(self, label, data)

    def record(self, span: LoggingSpan) -> None:
        """Store a finished span and log it."""
        self.spans.append(span)

        log_data = {
            "event": "span_completed",
            "request_id": self.request_id,
            "label": span.label,
            "data": span.data,
            "duration": f"{span.duration:.4f}s",
        }

        if span.duration > self.slow_threshold:
            logger.warning(f"Slow span detected: {span.label}", extra=log_data)
        else:
            logger.debug(f"Span completed: {span.label}", extra=log_data)
