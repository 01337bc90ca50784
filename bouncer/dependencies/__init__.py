"""FastAPI dependencies."""

from .bouncer import *

__all__ = [
    "get_bouncer",
    "get_current_user",
    "get_authorizer",
]
