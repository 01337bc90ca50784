"""Custom exceptions for the bouncer."""

from typing import TYPE_CHECKING, Any, Dict, Optional

from bouncer.constants.status_codes import AuthStatus, ErrorCode

if TYPE_CHECKING:
    from bouncer.policies.base_policy import AuthorizationResult


class BouncerException(Exception):
    """Base exception for all bouncer errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthorizationError(BouncerException):
    """Raised by ``authorize`` when the verdict is a deny."""

    def __init__(
        self,
        message: str = "E_AUTHORIZATION_FAILURE: Not authorized to perform this action",
        status: int = AuthStatus.ACCESS_DENIED,
        **kwargs,
    ):
        kwargs.setdefault("error_code", ErrorCode.AUTHORIZATION_FAILURE.value)
        super().__init__(message, **kwargs)
        self.status = int(status)

    @classmethod
    def from_result(cls, result: "AuthorizationResult", **kwargs) -> "AuthorizationError":
        """Build the error from a deny verdict."""
        if result.authorized or result.error_response is None:
            raise ValueError("Cannot build an AuthorizationError from an allow verdict")

        message, status = result.error_response
        return cls(message, status, **kwargs)


class ActionNotFoundError(BouncerException):
    """Raised when an action is not registered or not defined on a policy."""

    def __init__(self, action: str, policy: Optional[str] = None, **kwargs):
        if policy:
            message = f'Cannot run "{action}" action. Make sure it is defined on the "{policy}" policy'
        else:
            message = f'Cannot run "{action}" action. Make sure it is defined using "define"'
        kwargs.setdefault("details", {"action": action, "policy": policy})
        super().__init__(message, error_code=ErrorCode.ACTION_NOT_FOUND.value, **kwargs)
        self.action = action
        self.policy = policy


class PolicyNotFoundError(BouncerException):
    """Raised when a policy name has not been registered."""

    def __init__(self, policy: str, **kwargs):
        message = f'Cannot use "{policy}" policy. Make sure it is registered using "register_policies"'
        kwargs.setdefault("details", {"policy": policy})
        super().__init__(message, error_code=ErrorCode.POLICY_NOT_FOUND.value, **kwargs)
        self.policy = policy


class DuplicateActionError(BouncerException):
    """Raised when an action name is defined twice."""

    def __init__(self, action: str, **kwargs):
        message = f'Action "{action}" is already defined'
        kwargs.setdefault("details", {"action": action})
        super().__init__(message, error_code=ErrorCode.DUPLICATE_ACTION.value, **kwargs)
        self.action = action


class InvalidPolicyError(BouncerException):
    """Raised when a policy loader resolves to something other than a policy class."""

    def __init__(self, message: str = "Invalid policy", **kwargs):
        super().__init__(message, error_code=ErrorCode.INVALID_POLICY.value, **kwargs)


class InvalidActionResponseError(BouncerException):
    """Raised when an action or hook returns an unsupported response."""

    def __init__(self, response: Any, **kwargs):
        message = (
            "Action responses must be a boolean or a (message, status) tuple, "
            f"got {type(response).__name__}: {response!r}"
        )
        super().__init__(message, error_code=ErrorCode.INVALID_ACTION_RESPONSE.value, **kwargs)
        self.response = response
