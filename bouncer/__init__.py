"""Action and policy based authorization for FastAPI applications."""

from bouncer.config.settings import Settings
from bouncer.policies.base_policy import (
    ActionOptions,
    ActionResponse,
    AuthorizationResult,
    BasePolicy,
    action,
    deny,
)
from bouncer.provider import register_bouncer
from bouncer.services.authorizer import ActionsAuthorizer, PoliciesAuthorizer
from bouncer.services.bouncer import Bouncer
from bouncer.utils.exceptions import (
    ActionNotFoundError,
    AuthorizationError,
    BouncerException,
    DuplicateActionError,
    InvalidActionResponseError,
    InvalidPolicyError,
    PolicyNotFoundError,
)

__version__ = "1.0.0"

__all__ = [
    "ActionNotFoundError",
    "ActionOptions",
    "ActionResponse",
    "ActionsAuthorizer",
    "AuthorizationError",
    "AuthorizationResult",
    "BasePolicy",
    "Bouncer",
    "BouncerException",
    "DuplicateActionError",
    "InvalidActionResponseError",
    "InvalidPolicyError",
    "PoliciesAuthorizer",
    "PolicyNotFoundError",
    "Settings",
    "action",
    "deny",
    "register_bouncer",
]
