"""Constants package."""

from .status_codes import AuthStatus, ErrorCode, is_error_status

__all__ = [
    "AuthStatus",
    "ErrorCode",
    "is_error_status",
]
