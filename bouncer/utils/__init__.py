"""Utility functions and classes."""

from .exceptions import *
from .profiler import *

__all__ = [
    # Exceptions
    "BouncerException",
    "AuthorizationError",
    "ActionNotFoundError",
    "PolicyNotFoundError",
    "DuplicateActionError",
    "InvalidPolicyError",
    "InvalidActionResponseError",
    # Profiler
    "Profiler",
    "ProfilerSpan",
    "LoggingProfiler",
    "LoggingSpan",
    "profile",
]
