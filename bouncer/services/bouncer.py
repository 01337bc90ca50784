"""Bouncer: registry of actions, policies and hooks."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional, Tuple

from bouncer.config.settings import Settings, settings as default_settings
from bouncer.constants.status_codes import is_error_status
from bouncer.policies.base_policy import ActionOptions, AuthorizationResult
from bouncer.policies.registry import PolicyLoader, PolicyRegistry
from bouncer.utils.exceptions import DuplicateActionError

from .authorizer import ActionsAuthorizer
from .hooks import AfterHookHandler, BeforeHookHandler, HookChain

logger = logging.getLogger(__name__)

ActionHandler = Callable[..., Any]


@dataclass(frozen=True)
class ActionDefinition:
    """A registered action."""

    name: str
    handler: ActionHandler
    options: ActionOptions = field(default_factory=ActionOptions)


class Bouncer:
    """
    Defines actions, policies and hooks, and hands out authorizers.

    Build one instance during application setup and pass it where it is
    needed. Registration is expected to finish before requests are served.

    Usage:
        bouncer = (
            Bouncer()
            .define("edit-post", lambda user, post: user.id == post.author_id)
            .register_policies({"post": "app.policies.post:PostPolicy"})
        )

        if await bouncer.for_user(user).allows("edit-post", post):
            ...
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._actions: Dict[str, ActionDefinition] = {}
        self.policies = PolicyRegistry()
        self.hooks = HookChain()

    @property
    def actions(self) -> Mapping[str, ActionDefinition]:
        """Read-only view of the registered actions, in definition order."""
        return MappingProxyType(self._actions)

    def before(self, callback: BeforeHookHandler) -> "Bouncer":
        """Register a before hook."""
        self.hooks.add_before(callback)
        return self

    def after(self, callback: AfterHookHandler) -> "Bouncer":
        """Register an after hook."""
        self.hooks.add_after(callback)
        return self

    def define(
        self,
        name: str,
        handler: ActionHandler,
        options: Optional[ActionOptions] = None,
        *,
        allow_guest: bool = False,
    ) -> "Bouncer":
        """
        Define an action and its handler.

        Raises DuplicateActionError when the name is already defined.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Action name must be a non-empty string")
        if not callable(handler):
            raise TypeError(f'Handler for "{name}" action must be callable')
        if name in self._actions:
            raise DuplicateActionError(name)

        if options is None:
            options = ActionOptions(allow_guest=allow_guest)

        self._actions[name] = ActionDefinition(name=name, handler=handler, options=options)
        logger.debug(
            f"Action defined: {name}",
            extra={"event": "action_defined", "action": name, "allow_guest": options.allow_guest},
        )
        return self

    def register_policies(self, policies: Mapping[str, PolicyLoader]) -> "Bouncer":
        """Register policies, replacing any previously registered set."""
        self.policies.register(policies)
        return self

    def for_user(self, user: Any) -> ActionsAuthorizer:
        """Get an authorizer for the given user (``None`` for guests)."""
        return ActionsAuthorizer(self, user)

    def deny(self, message: str, status: Optional[int] = None) -> Tuple[str, int]:
        """Deny an authorization check using a custom message and an optional status."""
        if status is None:
            status = self.settings.DEFAULT_DENY_STATUS
        if not is_error_status(status):
            raise ValueError(f"Deny status must be a 4xx or 5xx code, got {status}")
        return (message, int(status))

    def normalize(self, response: Any) -> AuthorizationResult:
        """Normalize an action response using the configured defaults."""
        return AuthorizationResult.from_response(
            response,
            default_message=self.settings.DEFAULT_DENY_MESSAGE,
            default_status=self.settings.DEFAULT_DENY_STATUS,
        )

    def guest_denied(self) -> AuthorizationResult:
        """Verdict for a guest calling an action that does not allow guests."""
        return AuthorizationResult.deny(
            self.settings.DEFAULT_DENY_MESSAGE,
            self.settings.DEFAULT_DENY_STATUS,
        )
