"""Authorization policies system."""

from .base_policy import (
    ActionOptions,
    ActionResponse,
    AuthorizationResult,
    BasePolicy,
    action,
    deny,
)
from .registry import PolicyLoader, PolicyRegistry, import_string

__all__ = [
    "ActionOptions",
    "ActionResponse",
    "AuthorizationResult",
    "BasePolicy",
    "PolicyLoader",
    "PolicyRegistry",
    "action",
    "deny",
    "import_string",
]
