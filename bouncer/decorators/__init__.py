"""Decorators package."""

from .permissions import authorize

__all__ = [
    "authorize",
]
