"""Middleware package."""

from .exception_handler import ExceptionHandlers, register_exception_handlers
from .profiler_middleware import ProfilerMiddleware

__all__ = [
    "ExceptionHandlers",
    "register_exception_handlers",
    "ProfilerMiddleware",
]
