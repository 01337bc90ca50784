"""Status and error code constants with semantic names."""

from enum import Enum, IntEnum


class AuthStatus(IntEnum):
    """HTTP status codes used by authorization verdicts."""

    UNAUTHORIZED = 401
    ACCESS_DENIED = 403
    NOT_FOUND = 404
    INTERNAL_ERROR = 500


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by bouncer exceptions."""

    AUTHORIZATION_FAILURE = "E_AUTHORIZATION_FAILURE"
    ACTION_NOT_FOUND = "E_ACTION_NOT_FOUND"
    POLICY_NOT_FOUND = "E_POLICY_NOT_FOUND"
    DUPLICATE_ACTION = "E_DUPLICATE_ACTION"
    INVALID_POLICY = "E_INVALID_POLICY"
    INVALID_ACTION_RESPONSE = "E_INVALID_ACTION_RESPONSE"


def is_error_status(status: int) -> bool:
    """Check that a status code is a client or server error."""
    return 400 <= status <= 599
