"""Bouncer services."""

from .authorizer import ActionsAuthorizer, BaseAuthorizer, PoliciesAuthorizer
from .bouncer import ActionDefinition, Bouncer
from .hooks import HookChain

__all__ = [
    "ActionDefinition",
    "ActionsAuthorizer",
    "BaseAuthorizer",
    "Bouncer",
    "HookChain",
    "PoliciesAuthorizer",
]
